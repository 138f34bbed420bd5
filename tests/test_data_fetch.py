import unittest
from unittest import mock

import requests

from countersync.datafetch.data_fetch import DataFetch, mask_headers
from countersync.errors import TransportError
from countersync.translators.query_builder import assemble_operation
from countersync.translators.selection import LeafField
from countersync.translators.variables import VariableDescriptor

ENDPOINT = "https://abcdefghijklmnopqrstuvwxyz.appsync-api.us-east-1.amazonaws.com/graphql"


def fake_response(status_code=200, body=None, text=""):
    response = mock.Mock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.text = text
    if body is None:
        response.json.side_effect = ValueError("No JSON")
    else:
        response.json.return_value = body
    return response


class TestDataFetch(unittest.TestCase):
    """Unit tests for the GraphQL transport"""

    def setUp(self):
        self.fetcher = DataFetch(ENDPOINT, headers={"x-api-key": "da2-secret"}, timeout=5)
        patcher = mock.patch.object(self.fetcher.session, "post")
        self.post = patcher.start()
        self.addCleanup(patcher.stop)

    def test_returns_data(self):
        self.post.return_value = fake_response(body={"data": {"ping": "pong"}})
        result = self.fetcher.post({"query": "{ ping }"})
        self.assertEqual(result, {"data": {"ping": "pong"}})

        _, kwargs = self.post.call_args
        self.assertEqual(kwargs["json"], {"query": "{ ping }"})
        self.assertEqual(kwargs["headers"]["x-api-key"], "da2-secret")
        self.assertEqual(kwargs["headers"]["Content-Type"], "application/json")
        self.assertEqual(kwargs["timeout"], 5)
        self.assertIsNone(kwargs["auth"])

    def test_graphql_errors_on_http_error_are_returned(self):
        body = {"errors": [{"errorType": "UnauthorizedException", "message": "You are not authorized"}]}
        self.post.return_value = fake_response(status_code=401, body=body)
        self.assertEqual(self.fetcher.post({"query": "{ ping }"}), body)

    def test_http_error_without_graphql_body(self):
        self.post.return_value = fake_response(status_code=502, text="Bad Gateway")
        with self.assertRaises(TransportError) as ctx:
            self.fetcher.post({"query": "{ ping }"})
        self.assertIn("502", str(ctx.exception))

    def test_non_graphql_success_body(self):
        self.post.return_value = fake_response(body=["not", "graphql"])
        with self.assertRaises(TransportError):
            self.fetcher.post({"query": "{ ping }"})

    def test_network_failure(self):
        self.post.side_effect = requests.ConnectionError("connection refused")
        with self.assertRaises(TransportError):
            self.fetcher.post({"query": "{ ping }"})

    def test_execute_sends_operation_payload(self):
        self.post.return_value = fake_response(body={"data": {"createUser": {"name": "Alice"}}})
        operation = assemble_operation(
            "mutation",
            "createUser",
            {"name": VariableDescriptor("Alice", True, "String")},
            [LeafField("name")],
        )
        self.fetcher.execute(operation)
        _, kwargs = self.post.call_args
        self.assertEqual(kwargs["json"]["variables"], {"name": "Alice"})
        self.assertTrue(kwargs["json"]["query"].startswith("mutation createUser"))


def test_mask_headers():
    masked = mask_headers({"x-api-key": "da2-abcdefgh", "Content-Type": "application/json"})
    assert masked == {"x-api-key": "da2-...", "Content-Type": "application/json"}


if __name__ == "__main__":
    unittest.main()
