from dataclasses import dataclass, field
from typing import Dict

from graphql import (
    ArgumentNode,
    DocumentNode,
    FieldNode,
    GraphQLSyntaxError,
    ListTypeNode,
    NamedTypeNode,
    NameNode,
    NonNullTypeNode,
    OperationDefinitionNode,
    OperationType,
    SelectionSetNode,
    VariableDefinitionNode,
    VariableNode,
    parse_value,
    print_ast,
    value_from_ast_untyped,
)

from countersync.introspection.type_graph import ListTypeRef, NonNullTypeRef, named_type
from countersync.translators.selection import LeafField, ObjectField
from countersync.translators.variables import VariableDescriptor

OPERATION_TYPES = {
    "query": OperationType.QUERY,
    "mutation": OperationType.MUTATION,
}

# declared type for a variable whose argument type could not be read
FALLBACK_VARIABLE_TYPE = "String"

# scalars whose input is sent as typed literals instead of raw text
LITERAL_SCALARS = frozenset({"Int", "Float", "Boolean"})

# named kinds whose input is written in GraphQL value syntax
LITERAL_KINDS = frozenset({"ENUM", "INPUT_OBJECT"})


@dataclass
class OperationDocument:
    kind: str
    name: str
    document: DocumentNode
    variables: Dict[str, VariableDescriptor] = field(default_factory=dict)

    @property
    def query(self) -> str:
        return print_ast(self.document)

    @property
    def variable_values(self):
        return {name: variable_value(descriptor) for name, descriptor in self.variables.items()}

    def to_payload(self):
        return {"query": self.query, "variables": self.variable_values}


def _name(value):
    return NameNode(value=value)


def _type_ref_node(type_ref):
    if isinstance(type_ref, NonNullTypeRef):
        return NonNullTypeNode(type=_type_ref_node(type_ref.of_type))
    if isinstance(type_ref, ListTypeRef):
        return ListTypeNode(type=_type_ref_node(type_ref.of_type))
    return NamedTypeNode(name=_name(type_ref.name))


def variable_value(descriptor):
    """
    JSON value sent for a variable.

    Operator input stays text for strings, IDs and custom scalars. Numbers,
    booleans, enums and input objects are read as GraphQL literals, so ``5``
    becomes ``5`` and ``{name: "x"}`` becomes ``{"name": "x"}``. Input that is
    not a valid literal is sent as typed and left for the server to reject.
    """
    leaf = named_type(descriptor.type_ref)
    if leaf is not None and leaf.name:
        literal = leaf.name in LITERAL_SCALARS or leaf.kind in LITERAL_KINDS
    else:
        literal = descriptor.base_type_name in LITERAL_SCALARS
    if not literal:
        return descriptor.value

    try:
        return value_from_ast_untyped(parse_value(descriptor.value))
    except GraphQLSyntaxError:
        return descriptor.value


def variable_type_node(descriptor):
    """Declared type of a variable: the full argument type when known, else base type plus ``!``."""
    leaf = named_type(descriptor.type_ref)
    if leaf is not None and leaf.name:
        return _type_ref_node(descriptor.type_ref)

    named = NamedTypeNode(name=_name(descriptor.base_type_name or FALLBACK_VARIABLE_TYPE))
    if descriptor.required:
        return NonNullTypeNode(type=named)
    return named


def selection_set_node(selection):
    """
    Builds the selection set for a selection tree.

    Objects whose selection ended up empty are left out, since GraphQL does
    not allow an empty selection set. Returns ``None`` when nothing is selected.
    """
    if isinstance(selection, ObjectField):
        selection = selection.children

    selections = []
    for node in selection or ():
        if isinstance(node, LeafField):
            selections.append(FieldNode(name=_name(node.name), arguments=(), directives=()))
        elif isinstance(node, ObjectField):
            nested = selection_set_node(node.children)
            if nested is None:
                continue
            selections.append(
                FieldNode(
                    name=_name(node.selection_name),
                    arguments=(),
                    directives=(),
                    selection_set=nested,
                )
            )

    if not selections:
        return None
    return SelectionSetNode(selections=tuple(selections))


def assemble_operation(kind, action, variables=None, selection=None) -> OperationDocument:
    """
    Assembles ``kind action($var: Type) { action(var: $var) { ...selection } }``.

    :param kind: ``"query"`` or ``"mutation"``.
    :param action: Root field to call; also used as the operation name.
    :param variables: ``VariableDescriptor`` values keyed by argument name.
    :param selection: Selection tree or list of selection nodes; may be empty.
    """
    if kind not in OPERATION_TYPES:
        raise ValueError(f"Unsupported operation kind: {kind}")

    variables = dict(variables or {})

    variable_definitions = tuple(
        VariableDefinitionNode(
            variable=VariableNode(name=_name(name)),
            type=variable_type_node(descriptor),
            directives=(),
        )
        for name, descriptor in variables.items()
    )
    arguments = tuple(
        ArgumentNode(name=_name(name), value=VariableNode(name=_name(name)))
        for name in variables
    )

    root_field = FieldNode(
        name=_name(action),
        arguments=arguments,
        directives=(),
        selection_set=selection_set_node(selection),
    )
    operation = OperationDefinitionNode(
        operation=OPERATION_TYPES[kind],
        name=_name(action),
        variable_definitions=variable_definitions,
        directives=(),
        selection_set=SelectionSetNode(selections=(root_field,)),
    )
    return OperationDocument(
        kind=kind,
        name=action,
        document=DocumentNode(definitions=(operation,)),
        variables=variables,
    )
