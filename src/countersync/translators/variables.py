from dataclasses import dataclass, field
from typing import Dict, Optional

from countersync.introspection.type_graph import NonNullTypeRef, TypeRef


@dataclass(frozen=True)
class VariableDescriptor:
    value: str
    required: bool
    base_type_name: Optional[str]
    type_ref: Optional[TypeRef] = field(default=None, compare=False, repr=False)


def coerce_variables(args, raw_values) -> Dict[str, VariableDescriptor]:
    """
    Pairs operator input with the argument definitions of an action.

    Arguments without a value, or with an empty one, are left out. Values
    are passed through as typed; literal formatting is the query builder's job.

    :param args: The action's ``Arg`` definitions.
    :param raw_values: Raw input keyed by argument name.
    """
    variables = {}
    for arg in args:
        value = raw_values.get(arg.name)
        if value is None or len(value) == 0:
            continue

        if isinstance(arg.type, NonNullTypeRef):
            inner = arg.type.of_type
            variables[arg.name] = VariableDescriptor(
                value=value,
                required=True,
                base_type_name=inner.name if inner is not None else None,
                type_ref=arg.type,
            )
        else:
            variables[arg.name] = VariableDescriptor(
                value=value,
                required=False,
                base_type_name=arg.type.name if arg.type is not None else None,
                type_ref=arg.type,
            )
    return variables
