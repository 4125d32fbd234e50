import logging
from dataclasses import dataclass, fields
from typing import Dict, List, Optional

_logger = logging.getLogger(__name__)


def init(logger=None):
    """初始化 plaid_idv.rpc 模块

    """
    global _logger

    if logger:
        _logger = logger


def ensure_slots(cls, dct: Dict) -> Dict:
    """移除 dataclass 中不存在的key，预防 dataclass 的 __init__ 中 unexpected argument 的发生。

    返回一个新字典，不修改传入的 `dct`。
    """
    _names = [x.name for x in fields(cls)]
    result = {}
    for key, value in dct.items():
        if key in _names:
            result[key] = value
        else:
            _logger.warning("Unexpected field `{}` is removed when converting dict to dataclass `{}`".format(key, cls.__name__))
    return result


@dataclass(frozen=True)
class PlaidError:
    """error envelope returned by Plaid along with a non-2xx status code"""
    error_type: Optional[str] = None
    error_code: Optional[str] = None
    error_message: Optional[str] = None
    display_message: Optional[str] = None
    request_id: Optional[str] = None
    causes: Optional[List[Dict]] = None
    status: Optional[int] = None
    documentation_url: Optional[str] = None
    suggested_action: Optional[str] = None

    @classmethod
    def make(cls, dct) -> Optional["PlaidError"]:
        if not isinstance(dct, dict) or "error_code" not in dct:
            return None
        return cls(**ensure_slots(cls, dct))


class RpcException(Exception):
    """base class of every error raised by plaid_idv.rpc"""
    pass


class TransportError(RpcException, ConnectionError):
    """HTTP exchange failed: network failure, timeout or non-2xx status code"""

    def __init__(self, message: str, status_code: int = None, error: PlaidError = None):
        super().__init__(message)
        self.status_code = status_code
        self.error = error


class RpcTimeout(TransportError, TimeoutError):
    """timeout"""
    pass


class RpcClientException(TransportError):
    """HTTP 4xx"""
    pass


class RpcBadRequest(RpcClientException):
    """HTTP 400"""
    pass


class RpcUnauthorized(RpcClientException):
    """HTTP 401"""
    pass


class RpcResourceNotFound(RpcClientException):
    """HTTP 404"""
    pass


class RpcRateLimited(RpcClientException):
    """HTTP 429"""
    pass


class RpcServerException(TransportError):
    """HTTP 5xx"""
    pass


class RpcServerNotAvailable(RpcServerException):
    """HTTP 503"""
    pass


class MappingError(RpcException, ValueError):
    """response body could not be mapped onto the schema"""
    pass
