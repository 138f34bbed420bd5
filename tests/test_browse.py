import io
import unittest
from unittest import mock

from graphql import parse
from rich.console import Console

from countersync.browser.browse import GraphQLBrowser
from countersync.errors import TransportError
from countersync.introspection.schema_parser import SchemaParser

from graph_fixtures import (
    ScriptExhausted,
    ScriptedPrompter,
    field,
    object_type,
    payload,
    scalar,
    user_schema_payload,
)


class TestGraphQLBrowser(unittest.TestCase):
    """Unit tests for one browse iteration"""

    def setUp(self):
        self.schema = SchemaParser(user_schema_payload()).parse()
        self.fetcher = mock.Mock()
        self.fetcher.execute.return_value = {"data": {"ok": True}}
        self.output = io.StringIO()
        self.console = Console(file=self.output, width=120)

    def browser(self, prompter):
        return GraphQLBrowser(self.schema, self.fetcher, prompter, self.console)

    def sent_operation(self):
        return self.fetcher.execute.call_args[0][0]

    def test_query_with_truncation(self):
        prompter = ScriptedPrompter(
            picks=["query", "getUser"],
            texts={"id": "42"},
            depths=[2],
            confirms=[True],
        )
        self.assertTrue(self.browser(prompter).browse_once())

        operation = self.sent_operation()
        parse(operation.query)
        self.assertEqual(operation.kind, "query")
        self.assertEqual(
            " ".join(operation.query.split()),
            "query getUser($id: ID!) { getUser(id: $id) { id name role posts { title } } }",
        )
        self.assertEqual(operation.variable_values, {"id": "42"})
        self.assertIn("Got response from GraphQL", self.output.getvalue())

    def test_rejected_depth_is_asked_again(self):
        prompter = ScriptedPrompter(
            picks=["query", "getUser"],
            texts={"id": "42"},
            depths=[2, 1],
            confirms=[False, True],
        )
        self.browser(prompter).browse_once()

        query = " ".join(self.sent_operation().query.split())
        self.assertEqual(query, "query getUser($id: ID!) { getUser(id: $id) { id name role } }")
        self.assertEqual(prompter.depths, [])
        self.assertEqual(prompter.confirms, [])

    def test_list_result_and_optional_argument(self):
        prompter = ScriptedPrompter(picks=["query", "listUsers"], depths=[1], confirms=[True])
        self.browser(prompter).browse_once()

        operation = self.sent_operation()
        self.assertEqual(" ".join(operation.query.split()), "query listUsers { listUsers { id name role } }")
        self.assertEqual(operation.variables, {})
        self.assertIn("limit", prompter.asked)

    def test_mutation_selects_required_arguments(self):
        prompter = ScriptedPrompter(picks=["mutation"], texts={"name": "Alice", "age": ""})
        self.browser(prompter).browse_once()

        operation = self.sent_operation()
        self.assertEqual(operation.kind, "mutation")
        self.assertEqual(
            " ".join(operation.query.split()),
            "mutation createUser($name: String!) { createUser(name: $name) { name } }",
        )
        self.assertEqual(operation.variable_values, {"name": "Alice"})

    def test_scalar_query_needs_no_depth(self):
        self.schema = SchemaParser(payload([object_type("Query", [field("ping", scalar("String"))])])).parse()
        prompter = ScriptedPrompter()
        self.browser(prompter).browse_once()
        self.assertEqual(" ".join(self.sent_operation().query.split()), "query ping { ping }")

    def test_graphql_errors_are_shown(self):
        self.fetcher.execute.return_value = {"errors": [{"message": "Not Authorized to access getUser"}]}
        prompter = ScriptedPrompter(picks=["mutation"], texts={"name": "Alice"})
        self.assertTrue(self.browser(prompter).browse_once())
        self.assertIn("Got errors from GraphQL", self.output.getvalue())
        self.assertIn("Not Authorized", self.output.getvalue())

    def test_transport_failure_keeps_browsing(self):
        self.fetcher.execute.side_effect = TransportError("Query failed: 500")
        prompter = ScriptedPrompter(picks=["mutation"], texts={"name": "Alice"})
        self.assertTrue(self.browser(prompter).browse_once())

    def test_nothing_to_browse(self):
        self.schema = SchemaParser(payload([object_type("Query", [])])).parse()
        browser = self.browser(ScriptedPrompter())
        self.assertEqual(browser.browsable_kinds(), [])
        self.assertFalse(browser.browse_once())
        self.assertFalse(browser.run())
        self.fetcher.execute.assert_not_called()

    def test_run_repeats_until_interrupted(self):
        prompter = ScriptedPrompter(picks=["mutation", "mutation"], texts={"name": "Alice"})
        with self.assertRaises(ScriptExhausted):
            self.browser(prompter).run()
        self.assertEqual(self.fetcher.execute.call_count, 2)


if __name__ == "__main__":
    unittest.main()
