from rich.console import Console

from countersync import log
from countersync.errors import TransportError
from countersync.introspection.type_graph import named_type
from countersync.translators.depth import field_depth, truncate_fields
from countersync.translators.field_resolver import FieldResolver
from countersync.translators.query_builder import assemble_operation
from countersync.translators.selection import LeafField, ObjectField
from countersync.translators.variables import coerce_variables
from countersync.ui.prompts import DEFAULT_TRUNCATION_DEPTH, Prompter
from countersync.ui.render import print_query, print_response, print_selection

# subscriptions are not browsable
BROWSABLE_KINDS = ("query", "mutation")


class GraphQLBrowser:
    """
    Interactive loop over a parsed schema. Each iteration:
    - picks an operation kind and one of its actions,
    - resolves the selection (object fields for queries, required
      arguments for mutations), truncating deep queries on request,
    - collects variables, assembles and sends the operation,
    - shows the response.

    Nothing but the schema and the fetcher survives between iterations.
    """

    def __init__(self, schema, fetcher, prompter=None, console=None):
        self.schema = schema
        self.fetcher = fetcher
        self.console = console or Console()
        self.prompter = prompter or Prompter(self.console)

    def browsable_kinds(self):
        return [kind for kind in BROWSABLE_KINDS if self.schema.actions(kind)]

    def run(self):
        """
        Browses until the operator interrupts.

        :return: ``False`` when the schema has nothing to browse.
        """
        while self.browse_once():
            pass
        return False

    def browse_once(self):
        kinds = self.browsable_kinds()
        if not kinds:
            log.error("[!] Nothing to interact with.")
            return False

        kind = self.prompter.pick_value(kinds, "Which object type would you like to browse?")
        root = self.schema.root_type(kind)

        actions = sorted(field.name for field in root.fields)
        action = self.prompter.pick_value(actions, "Which action would you like to perform?")
        action_field = root.field(action)

        if kind == "query":
            selection = self.query_selection(action_field)
        else:
            selection = self.mutation_selection(action_field)

        variables = self.collect_variables(action_field)
        operation = assemble_operation(kind, action, variables, selection)
        print_query(self.console, operation)

        try:
            response = self.fetcher.execute(operation)
        except TransportError as e:
            log.error(f"[!] {e}")
            return True

        print_response(self.console, response)
        return True

    def query_selection(self, action_field):
        result_type = named_type(action_field.type)
        resolved = FieldResolver(self.schema).resolve(result_type.name if result_type else None)
        if not isinstance(resolved, ObjectField):
            return None

        fields = resolved.children
        print_selection(self.console, fields, resolved.type_name)
        log.info("[*] The schema above represents the data to be requested.")

        depth = field_depth(fields)
        if depth > 0:
            log.info(f"[*] '{action_field.name}' has a query field depth of {depth}")
            log.info(
                "[*] It's STRONGLY recommended that you limit the query depth "
                "until a single full object is returned."
            )
            fields = truncate_fields(fields, self.truncate_depth_interactively(fields, resolved.type_name))
        return fields

    def truncate_depth_interactively(self, fields, title):
        """Asks for a depth until the operator accepts the previewed selection."""
        while True:
            depth = self.prompter.ask_depth(default=DEFAULT_TRUNCATION_DEPTH)
            print_selection(self.console, truncate_fields(fields, depth), title)
            if self.prompter.confirm("Is this what you want to send?", default=False):
                return depth

    @staticmethod
    def mutation_selection(action_field):
        return [LeafField(arg.name) for arg in action_field.required_args]

    def collect_variables(self, action_field):
        if not action_field.args:
            return {}

        log.info(
            f"[*] '{action_field.name}' has {len(action_field.args)} parameters. "
            "Those appended with '!' are required."
        )
        raw_values = {
            arg.name: self.prompter.ask_text(arg.name, required=arg.is_required, type_label=str(arg.type))
            for arg in action_field.args
        }
        return coerce_variables(action_field.args, raw_values)
