from dataclasses import replace

from countersync.translators.selection import LeafField, ObjectField


def field_depth(fields, depth=0):
    """
    Number of nested object levels below the root of a selection.

    A list of leaves has depth 0; each level of object nesting adds one.
    An ``ObjectField`` is measured through its children.
    """
    if isinstance(fields, ObjectField):
        fields = fields.children

    if fields is None or isinstance(fields, LeafField):
        return depth

    child_objects = [e for e in fields if isinstance(e, ObjectField)]
    if not child_objects:
        return depth

    return max(field_depth(child.children, depth + 1) for child in child_objects)


def truncate_fields(fields, depth):
    """
    Prunes a selection to ``depth`` levels.

    At depth 1 only leaves survive; nested objects are dropped. Depth 0
    keeps nothing and returns ``None``.
    """
    if depth < 0:
        raise ValueError(f"Truncation depth must not be negative: {depth}")

    if depth == 0:
        return None

    if isinstance(fields, ObjectField):
        return replace(fields, children=truncate_fields(fields.children, depth))

    if isinstance(fields, LeafField):
        return fields

    truncated = []
    for element in fields:
        if isinstance(element, LeafField):
            truncated.append(element)
        elif depth > 1:
            truncated.append(replace(element, children=truncate_fields(element.children, depth - 1)))

    return truncated
