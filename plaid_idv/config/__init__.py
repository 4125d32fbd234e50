import copy
import os

from plaid_idv.config.default import Config as DefaultConfig

_config_inited = False


class ConfigurationError(ValueError):
    """a per-call config value is not usable, raised before any request is sent"""
    pass


class MixedConfig(DefaultConfig):
    pass


def get_config():
    """
    单例配置加载
    :return: Config 类
    """
    global _config_inited
    if _config_inited:
        return MixedConfig
    else:
        mode = os.environ.get('PLAID_ENV', '').lower()
        _override_config = {}

        if mode == 'production':
            from plaid_idv.config.production import ProductionConfig
            _override_config = ProductionConfig
            MixedConfig.CONFIG_NAME = 'production'
        elif mode == 'development':
            from plaid_idv.config.development import DevelopmentConfig
            _override_config = DevelopmentConfig
            MixedConfig.CONFIG_NAME = 'development'
        elif mode == 'sandbox':
            MixedConfig.CONFIG_NAME = 'sandbox'
        else:
            MixedConfig.CONFIG_NAME = 'default'

        for key in dir(_override_config):
            if key.isupper():
                if isinstance(getattr(_override_config, key), dict) \
                        and key in dir(MixedConfig) \
                        and isinstance(getattr(MixedConfig, key), dict):
                    # 字典内容增量覆盖
                    dict_to_modify = copy.copy(getattr(MixedConfig, key))
                    for k, v in getattr(_override_config, key).items():
                        dict_to_modify[k] = v
                    setattr(MixedConfig, key, dict_to_modify)
                else:
                    # 其他类型的值直接覆盖
                    setattr(MixedConfig, key, getattr(_override_config, key))

        _config_inited = True
        return MixedConfig


def reset_config():
    """drop the cached config so that the next `get_config()` reads the environment again"""
    global _config_inited
    for key in list(vars(MixedConfig)):
        if key.isupper():
            delattr(MixedConfig, key)
    _config_inited = False


def print_config(logger):
    """print config in log"""
    config = get_config()
    logger.info('Below are configurations we are using:')
    logger.info('================================================================')
    for key in dir(config):
        if not key.isupper():
            continue
        if key not in config.SECURE_FIELDS:
            logger.info('{}: {}'.format(key, getattr(config, key)))
        else:
            logger.info("{}: [secret]".format(key))
    logger.info('================================================================')
