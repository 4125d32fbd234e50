from plaid_idv.config.default import Config


class ProductionConfig(Config):
    CONFIG_NAME = 'production'
    PLAID_ENV = 'production'
    BASE_URL = Config.BASE_URLS['production']
    LOG_LEVEL = 'WARNING'
