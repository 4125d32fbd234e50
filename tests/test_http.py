import unittest
from unittest import mock

import requests

from tests.sample_responses import IDENTITY_VERIFICATION, INVALID_ID_ERROR


def _fake_response(status_code, body=None, json_error=False):
    response = mock.Mock(status_code=status_code)
    if json_error:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.json.return_value = body
    return response


class RequestTest(unittest.TestCase):
    """plaid_idv/rpc/http.py Request"""

    def test_add_metadata(self):
        from plaid_idv.rpc.http import Request

        params = {"identity_verification_id": "idv_123"}
        request = Request(method="POST", endpoint="identity_verification/get", body=params)
        request = request.add_metadata({"client_id": "cid", "secret": "sec", "plaid_version": "2099-01-01"})

        self.assertEqual(request.body, {"identity_verification_id": "idv_123", "client_id": "cid", "secret": "sec"})
        self.assertEqual(request.headers["Plaid-Version"], "2099-01-01")
        self.assertEqual(request.headers["Content-Type"], "application/json")
        self.assertEqual(params, {"identity_verification_id": "idv_123"})

    def test_body_credentials_win(self):
        from plaid_idv.rpc.http import Request

        request = Request(method="POST", endpoint="e", body={"client_id": "from_body"})
        request = request.add_metadata({"client_id": "from_config"})
        self.assertEqual(request.body["client_id"], "from_body")

    def test_global_credentials(self):
        from plaid_idv.config import get_config
        from plaid_idv.rpc.http import Request

        config = get_config()
        with mock.patch.object(config, "PLAID_CLIENT_ID", "global_cid"), \
                mock.patch.object(config, "PLAID_SECRET", None):
            request = Request(method="POST", endpoint="e").add_metadata()
        self.assertEqual(request.body, {"client_id": "global_cid"})
        self.assertEqual(request.headers["Plaid-Version"], config.PLAID_VERSION)


class ClientTest(unittest.TestCase):
    """plaid_idv/rpc/http.py Client"""

    def test_default_root_uri(self):
        from plaid_idv.config import get_config
        from plaid_idv.rpc.http import Client

        client = Client.new({})
        self.assertEqual(client.root_uri, get_config().BASE_URL)
        self.assertEqual(client.timeout, get_config().HTTP_TIMEOUT)

    def test_env_and_options(self):
        from plaid_idv.rpc.http import Client

        client = Client.new({"env": "production", "http_options": {"timeout": 3}})
        self.assertEqual(client.url_for("identity_verification/get"),
                         "https://production.plaid.com/identity_verification/get")
        self.assertEqual(client.timeout, 3)

    def test_root_uri_override(self):
        from plaid_idv.rpc.http import Client

        client = Client.new({"root_uri": "http://localhost:8080/"})
        self.assertEqual(client.url_for("/identity_verification/get"), "http://localhost:8080/identity_verification/get")

    def test_env_is_case_insensitive(self):
        from plaid_idv.rpc.http import Client

        self.assertEqual(Client.new({"env": "Sandbox"}).root_uri, "https://sandbox.plaid.com")

    def test_unknown_env(self):
        from plaid_idv.config import ConfigurationError
        from plaid_idv.rpc.http import Client

        with self.assertRaises(ConfigurationError) as cm:
            Client.new({"env": "staging"})
        self.assertIn("development, production, sandbox", str(cm.exception))
        self.assertIsInstance(cm.exception, ValueError)


class HttpRpcTest(unittest.TestCase):
    """plaid_idv/rpc/http.py HttpRpc"""

    def setUp(self):
        from plaid_idv.rpc.http import Client, Request

        self.request = Request(method="POST",
                               endpoint="identity_verification/get",
                               body={"identity_verification_id": "idv_123", "secret": "sec"})
        self.client = Client(root_uri="https://sandbox.plaid.com", timeout=5)

    def test_send_request(self):
        from plaid_idv.rpc.http import HttpRpc

        with mock.patch.object(requests.Session, "request",
                               return_value=_fake_response(200, IDENTITY_VERIFICATION)) as request:
            response = HttpRpc().send_request(self.request, self.client)

        request.assert_called_once_with("POST", "https://sandbox.plaid.com/identity_verification/get",
                                        json=self.request.body, headers=self.request.headers, timeout=5)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.body, IDENTITY_VERIFICATION)

    def test_secret_is_masked_in_log(self):
        from plaid_idv.rpc.http import HttpRpc

        with mock.patch.object(requests.Session, "request", return_value=_fake_response(200, {})), \
                self.assertLogs("plaid_idv.rpc", level="DEBUG") as cm:
            HttpRpc().send_request(self.request, self.client)
        body = cm.records[0].structured_data["body"]
        self.assertEqual(body["secret"], "[secret]")
        self.assertEqual(body["identity_verification_id"], "idv_123")

    def test_timeout(self):
        from plaid_idv.rpc import RpcTimeout
        from plaid_idv.rpc.http import HttpRpc

        with mock.patch.object(requests.Session, "request", side_effect=requests.exceptions.ReadTimeout()):
            with self.assertRaises(RpcTimeout) as cm:
                HttpRpc().send_request(self.request, self.client)
        self.assertIsNone(cm.exception.status_code)

    def test_connection_error(self):
        from plaid_idv.rpc import TransportError
        from plaid_idv.rpc.http import HttpRpc

        with mock.patch.object(requests.Session, "request", side_effect=requests.exceptions.ConnectionError()):
            with self.assertRaises(TransportError):
                HttpRpc().send_request(self.request, self.client)

    def test_non_json_body(self):
        from plaid_idv.rpc import TransportError
        from plaid_idv.rpc.http import HttpRpc

        with mock.patch.object(requests.Session, "request", return_value=_fake_response(502, json_error=True)):
            with self.assertRaises(TransportError) as cm:
                HttpRpc().send_request(self.request, self.client)
        self.assertEqual(cm.exception.status_code, 502)

    def test_successful_non_json_body(self):
        from plaid_idv.rpc import MappingError, TransportError
        from plaid_idv.rpc.http import HttpRpc

        with mock.patch.object(requests.Session, "request", return_value=_fake_response(200, json_error=True)):
            with self.assertRaises(MappingError) as cm:
                HttpRpc().send_request(self.request, self.client)
        self.assertNotIsInstance(cm.exception, TransportError)

    def test_handle_success(self):
        from plaid_idv.rpc.http import HttpRpc, Response

        mapper = mock.Mock(return_value="mapped")
        result = HttpRpc().handle_response(Response(200, {"id": "idv_123"}), mapper)
        self.assertEqual(result, "mapped")
        mapper.assert_called_once_with({"id": "idv_123"})

    def test_handle_status_codes(self):
        from plaid_idv import rpc
        from plaid_idv.rpc.http import HttpRpc, Response

        cases = ((400, rpc.RpcBadRequest),
                 (401, rpc.RpcUnauthorized),
                 (403, rpc.RpcClientException),
                 (404, rpc.RpcResourceNotFound),
                 (429, rpc.RpcRateLimited),
                 (500, rpc.RpcServerException),
                 (503, rpc.RpcServerNotAvailable))
        for status_code, exception in cases:
            mapper = mock.Mock()
            with self.assertRaises(exception) as cm:
                HttpRpc().handle_response(Response(status_code, {"error_code": "X"}), mapper)
            self.assertIsInstance(cm.exception, rpc.TransportError)
            self.assertEqual(cm.exception.status_code, status_code)
            mapper.assert_not_called()

    def test_plaid_error_is_attached(self):
        from plaid_idv.rpc import PlaidError, RpcBadRequest
        from plaid_idv.rpc.http import HttpRpc, Response

        with self.assertRaises(RpcBadRequest) as cm:
            HttpRpc().handle_response(Response(400, INVALID_ID_ERROR), mock.Mock())
        self.assertEqual(cm.exception.error, PlaidError(**INVALID_ID_ERROR))
        self.assertEqual(str(cm.exception), INVALID_ID_ERROR["error_message"])

    def test_error_without_envelope(self):
        from plaid_idv.rpc import RpcServerException
        from plaid_idv.rpc.http import HttpRpc, Response

        with self.assertRaises(RpcServerException) as cm:
            HttpRpc().handle_response(Response(500, ["oops"]), mock.Mock())
        self.assertIsNone(cm.exception.error)

    def test_non_object_body(self):
        from plaid_idv.rpc import MappingError
        from plaid_idv.rpc.http import HttpRpc, Response

        mapper = mock.Mock()
        with self.assertRaises(MappingError):
            HttpRpc().handle_response(Response(200, ["idv_123"]), mapper)
        mapper.assert_not_called()
