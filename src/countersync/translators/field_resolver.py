from dataclasses import replace

from countersync.introspection.type_graph import BUILTIN_SCALARS, ListTypeRef
from countersync.translators.selection import LeafField, ObjectField


class FieldResolver:
    """Expands a named type of a :class:`Schema` into a selection tree.

    Object-typed fields are expanded recursively. Every type is expanded at
    most once per top-level :meth:`resolve` call: the visited set is shared by
    all recursive calls beneath it, so self-referencing and mutually
    referencing types terminate, and a type that was already expanded
    elsewhere in the tree is left out.
    """

    def __init__(self, schema):
        self.schema = schema

    def resolve(self, type_name, visited=None):
        """
        :param type_name: Name of the type to expand; ``None`` resolves to ``None``.
        :param visited: Type names already expanded. Leave unset for a fresh top-level call.
        :return: ``ObjectField`` for object types, ``LeafField(type_name)`` for leaf
                 types, ``None`` when the type was already expanded.
        """
        if visited is None:
            visited = set()

        if type_name is None:
            return None

        type_def = self.schema.get_type(type_name)
        if type_def is None or type_def.is_leaf:
            return LeafField(type_name)

        if type_name in visited:
            return None
        visited.add(type_name)

        children = []
        for field in type_def.fields:
            child = self._resolve_field(field, visited)
            if child is not None:
                children.append(child)

        return ObjectField(type_name, children)

    def _resolve_field(self, field, visited):
        type_ref = field.type
        top_name = type_ref.name if type_ref is not None else None

        if top_name in BUILTIN_SCALARS:
            return LeafField(field.name)

        list_of_named = (
            isinstance(type_ref, ListTypeRef)
            and type_ref.of_type is not None
            and type_ref.of_type.name is not None
        )

        if top_name is None and not list_of_named:
            return LeafField(field.name)

        target = type_ref.of_type.name if list_of_named else top_name
        resolved = self.resolve(target, visited)

        # custom scalars and enums are selected under the field's own name
        if isinstance(resolved, LeafField):
            return LeafField(field.name)
        if isinstance(resolved, ObjectField):
            return replace(resolved, field_name=field.name)
        return None
