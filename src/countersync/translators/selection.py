"""Selection trees produced by the field resolver and consumed by the query builder."""

from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple, Union


@dataclass(frozen=True)
class LeafField:
    """A field with no sub-selection (scalar or enum result)."""

    name: str


@dataclass(frozen=True)
class ObjectField:
    """An object-typed field expanded into its own children.

    ``type_name`` identifies the expansion; ``field_name`` is the field the
    expansion was reached through and is what ends up in the query text.
    It does not take part in equality.
    """

    type_name: str
    children: Tuple["SelectionNode", ...] = ()
    field_name: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "children", tuple(self.children))

    @property
    def selection_name(self) -> str:
        return self.field_name or self.type_name


SelectionNode = Union[LeafField, ObjectField]
Selection = Sequence[SelectionNode]


def to_plain(node):
    """
    Converts a selection tree to plain strings, lists and single-key dicts,
    e.g. ``{"User": ["id", "name", {"Post": ["title"]}]}``.
    """
    if node is None:
        return None
    if isinstance(node, LeafField):
        return node.name
    if isinstance(node, ObjectField):
        return {node.type_name: [to_plain(child) for child in node.children]}
    return [to_plain(child) for child in node]
