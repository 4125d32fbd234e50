from plaid_idv.config.default import Config


class DevelopmentConfig(Config):
    CONFIG_NAME = 'development'
    PLAID_ENV = 'development'
    BASE_URL = Config.BASE_URLS['development']
    LOG_LEVEL = 'DEBUG'
