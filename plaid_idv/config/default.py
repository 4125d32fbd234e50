import os


class Config(object):
    """
    the base class for configuration. all keys must define here.
    """
    CONFIG_NAME = 'default'
    PLAID_ENV = 'sandbox'

    """
    Connection settings
    """
    BASE_URLS = {
        'sandbox'    : 'https://sandbox.plaid.com',
        'development': 'https://development.plaid.com',
        'production' : 'https://production.plaid.com',
    }
    BASE_URL = BASE_URLS['sandbox']
    HTTP_TIMEOUT = 30  # seconds

    """
    Credentials
    """
    PLAID_CLIENT_ID = os.environ.get('PLAID_CLIENT_ID')
    PLAID_SECRET = os.environ.get('PLAID_SECRET')
    PLAID_VERSION = '2020-09-14'
    USER_AGENT = 'plaid-idv'

    """
    Logging
    """
    LOG_LEVEL = 'INFO'

    # fields that are masked when a request body or the config is logged
    SECURE_FIELDS = ['PLAID_SECRET', 'secret']
