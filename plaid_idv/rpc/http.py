from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Mapping, Optional

import requests

from plaid_idv import rpc
from plaid_idv.config import ConfigurationError, get_config
from plaid_idv.rpc import MappingError, PlaidError, RpcBadRequest, RpcClientException, RpcRateLimited, \
    RpcResourceNotFound, RpcServerException, RpcServerNotAvailable, RpcTimeout, RpcUnauthorized, TransportError


@dataclass(frozen=True)
class Request:
    """description of one call to the Plaid API, independent of the HTTP library"""
    method: str
    endpoint: str
    body: Dict = field(default_factory=dict)
    headers: Dict = field(default_factory=dict)

    def add_metadata(self, config: Mapping = None) -> "Request":
        """attach credentials to the body and versioning headers. keys already in the body are kept.

        :param config: per-call config, `client_id`, `secret` and `plaid_version` override global config
        """
        config = config or {}
        global_config = get_config()

        body = {'client_id': config.get('client_id') or global_config.PLAID_CLIENT_ID,
                'secret'   : config.get('secret') or global_config.PLAID_SECRET}
        body = {k: v for k, v in body.items() if v is not None}
        body.update(self.body or {})

        headers = {'Content-Type' : 'application/json',
                   'Plaid-Version': config.get('plaid_version') or global_config.PLAID_VERSION,
                   'User-Agent'   : global_config.USER_AGENT}
        headers.update(self.headers)
        return replace(self, body=body, headers=headers)


@dataclass
class Client:
    """connection settings of one call, built from the per-call config"""
    root_uri: str
    timeout: Optional[float]
    session: requests.Session = field(default_factory=requests.Session)

    @classmethod
    def new(cls, config: Mapping = None) -> "Client":
        config = config or {}
        global_config = get_config()

        root_uri = config.get('root_uri')
        if not root_uri:
            env = config.get('env')
            if env:
                env = env.lower()
                if env not in global_config.BASE_URLS:
                    raise ConfigurationError('Unknown Plaid environment `{}`, expected one of {}'.format(
                            config.get('env'), ', '.join(sorted(global_config.BASE_URLS))))
                root_uri = global_config.BASE_URLS[env]
            else:
                root_uri = global_config.BASE_URL
        http_options = config.get('http_options') or {}
        return cls(root_uri=root_uri.rstrip('/'),
                   timeout=http_options.get('timeout', global_config.HTTP_TIMEOUT))

    def url_for(self, endpoint: str) -> str:
        return '{}/{}'.format(self.root_uri, endpoint.lstrip('/'))


@dataclass(frozen=True)
class Response:
    status_code: int
    body: Any


def _mask(body: Dict) -> Dict:
    """replace secure fields so that the body can be logged"""
    secure_fields = get_config().SECURE_FIELDS
    return {k: ('[secret]' if k in secure_fields else v) for k, v in body.items()}


class HttpRpc:
    """default collaborator that sends a `Request` with `requests` and checks the `Response`"""

    @classmethod
    def _status_code_raise(cls, response: Response) -> None:
        """
        raise exception if HTTP status code is not 2xx

        :param response: a `Response` object
        """
        status_code = response.status_code
        if 200 <= status_code < 300:
            return
        error = PlaidError.make(response.body)
        message = error.error_message if error and error.error_message else str(response.body)
        if status_code >= 500:
            if status_code == 503:
                raise RpcServerNotAvailable(message, status_code, error)
            raise RpcServerException(message, status_code, error)
        if 400 <= status_code < 500:
            if status_code == 400:
                raise RpcBadRequest(message, status_code, error)
            if status_code == 401:
                raise RpcUnauthorized(message, status_code, error)
            if status_code == 404:
                raise RpcResourceNotFound(message, status_code, error)
            if status_code == 429:
                raise RpcRateLimited(message, status_code, error)
            raise RpcClientException(message, status_code, error)
        raise TransportError(message, status_code, error)

    def send_request(self, request: Request, client: Client) -> Response:
        """send the request once. network failures raise `TransportError`, they are never retried.

        :param request: a `Request` with metadata already attached
        :param client: a `Client` built by `Client.new`
        """
        url = client.url_for(request.endpoint)
        rpc._logger.debug('RPC {} {}'.format(request.method, url),
                          extra={'structured_data': {'body': _mask(request.body)}})
        try:
            api_response = client.session.request(request.method, url,
                                                  json=request.body,
                                                  headers=request.headers,
                                                  timeout=client.timeout)
        except requests.exceptions.Timeout as e:
            raise RpcTimeout('Timeout when calling {}'.format(url)) from e
        except requests.exceptions.RequestException as e:
            raise TransportError('Failed to call {}: {}'.format(url, e)) from e

        try:
            body = api_response.json()
        except ValueError as e:
            if 200 <= api_response.status_code < 300:
                raise MappingError('Non-JSON body in successful response from {}'.format(url)) from e
            raise TransportError('Non-JSON response from {}'.format(url), api_response.status_code) from e
        rpc._logger.debug('RPC result: {}'.format(body),
                          extra={'structured_data': {'status_code': api_response.status_code}})
        return Response(status_code=api_response.status_code, body=body)

    def handle_response(self, response: Response, mapper: Callable[[Dict], Any]) -> Any:
        """map a successful response with `mapper`, raise on everything else

        :param response: what `send_request` returned
        :param mapper: callable turning the JSON body into a typed object
        """
        self._status_code_raise(response)
        if not isinstance(response.body, dict):
            raise MappingError('Expected a JSON object, got {}'.format(type(response.body).__name__))
        return mapper(response.body)
