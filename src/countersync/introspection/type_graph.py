"""In-memory model of an introspected GraphQL schema.

Everything here is immutable and built once by :class:`SchemaParser`.
Type references are a small sum type so callers can unwrap wrapper chains
with ``isinstance`` checks instead of probing optional keys:

    NamedTypeRef(kind, name) | NonNullTypeRef(of_type) | ListTypeRef(of_type)
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple, Union

BUILTIN_SCALARS = frozenset({"String", "Int", "Float", "Boolean", "ID"})

ROOT_OPERATION_KINDS = ("query", "mutation", "subscription")


@dataclass(frozen=True)
class NamedTypeRef:
    kind: str
    name: Optional[str]

    def __str__(self):
        return self.name or ""


@dataclass(frozen=True)
class NonNullTypeRef:
    of_type: Optional["TypeRef"]

    kind = "NON_NULL"
    name = None

    def __str__(self):
        return f"{self.of_type or ''}!"


@dataclass(frozen=True)
class ListTypeRef:
    of_type: Optional["TypeRef"]

    kind = "LIST"
    name = None

    def __str__(self):
        return f"[{self.of_type or ''}]"


TypeRef = Union[NamedTypeRef, NonNullTypeRef, ListTypeRef]


def named_type(type_ref: Optional[TypeRef]) -> Optional[NamedTypeRef]:
    """Strips every NON_NULL/LIST wrapper and returns the named leaf, if the chain has one."""
    while isinstance(type_ref, (NonNullTypeRef, ListTypeRef)):
        type_ref = type_ref.of_type
    return type_ref


@dataclass(frozen=True)
class Arg:
    name: str
    type: Optional[TypeRef]
    default_value: Optional[str] = None
    description: Optional[str] = None

    @property
    def is_required(self) -> bool:
        return isinstance(self.type, NonNullTypeRef)


@dataclass(frozen=True)
class Field:
    name: str
    type: Optional[TypeRef]
    args: Tuple[Arg, ...] = ()
    description: Optional[str] = None
    is_deprecated: bool = False

    @property
    def required_args(self) -> Tuple[Arg, ...]:
        return tuple(arg for arg in self.args if arg.is_required)


@dataclass(frozen=True)
class TypeDef:
    name: str
    kind: str
    fields: Optional[Tuple[Field, ...]] = None
    input_fields: Optional[Tuple[Arg, ...]] = None
    enum_values: Optional[Tuple[str, ...]] = None
    interfaces: Tuple[str, ...] = ()
    possible_types: Tuple[str, ...] = ()
    description: Optional[str] = None

    @property
    def is_leaf(self) -> bool:
        """A type with no selectable fields (scalars, enums, input objects)."""
        return self.fields is None

    def field(self, name: str) -> Optional[Field]:
        for candidate in self.fields or ():
            if candidate.name == name:
                return candidate
        return None


@dataclass(frozen=True)
class DirectiveDef:
    name: str
    locations: Tuple[str, ...] = ()
    args: Tuple[Arg, ...] = ()
    description: Optional[str] = None


@dataclass(frozen=True)
class Schema:
    types: Tuple[TypeDef, ...]
    directives: Tuple[DirectiveDef, ...] = ()
    query_type_name: Optional[str] = None
    mutation_type_name: Optional[str] = None
    subscription_type_name: Optional[str] = None
    _types_by_name: Dict[str, TypeDef] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_types_by_name", {t.name: t for t in self.types})

    def get_type(self, name: Optional[str]) -> Optional[TypeDef]:
        if name is None:
            return None
        return self._types_by_name.get(name)

    def root_type_name(self, operation_kind: str) -> Optional[str]:
        if operation_kind not in ROOT_OPERATION_KINDS:
            raise ValueError(f"Unknown operation kind: {operation_kind}")
        return getattr(self, f"{operation_kind}_type_name")

    def root_type(self, operation_kind: str) -> Optional[TypeDef]:
        return self.get_type(self.root_type_name(operation_kind))

    def actions(self, operation_kind: str) -> Tuple[Field, ...]:
        """Fields of the root type for ``operation_kind``; empty when the root is absent."""
        root = self.root_type(operation_kind)
        if root is None:
            return ()
        return root.fields or ()
