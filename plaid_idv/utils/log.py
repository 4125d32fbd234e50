import logging

LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s %(message)s'


class StructuredFormatter(logging.Formatter):
    """prefix the message with `extra={'structured_data': {...}}`, e.g. `[status_code:400] RPC result: ...`

    the record itself is left untouched, so several handlers may format it.
    """

    def format(self, record: logging.LogRecord) -> str:
        structured_data = getattr(record, "structured_data", None)
        if not structured_data:
            return super().format(record)
        msg = record.msg
        record.msg = "%s %s" % (self._join_extra(structured_data), msg)
        try:
            return super().format(record)
        finally:
            record.msg = msg

    @staticmethod
    def _join_extra(extra: dict) -> str:
        return "[%s]" % ", ".join('%s:%s' % item for item in extra.items())


def configure_logging(level=None, handler: logging.Handler = None) -> logging.Logger:
    """attach a `StructuredFormatter` handler to the `plaid_idv` logger

    :param level: log level, defaults to `LOG_LEVEL` in config
    :param handler: handler to use, defaults to a `StreamHandler`
    """
    from plaid_idv.config import get_config

    logger = logging.getLogger('plaid_idv')
    if handler is None:
        handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level or get_config().LOG_LEVEL)
    return logger
