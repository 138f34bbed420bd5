import json

from countersync import log
from countersync.introspection.type_graph import (
    Arg,
    DirectiveDef,
    Field,
    ListTypeRef,
    NamedTypeRef,
    NonNullTypeRef,
    Schema,
    TypeDef,
)


class SchemaParser:
    """Turns the JSON of a full GraphQL introspection query into a :class:`Schema`.

    The payload is the raw response body:
        {
          "data": {
            "__schema": {
              "queryType": {...},
              "mutationType": {...},
              "subscriptionType": {...},
              "types": [...],
              "directives": [...]
            }
          }
        }
    """

    def __init__(self, schema_data):
        """
        :param schema_data: The decoded introspection response.
        """
        if (
            not isinstance(schema_data, dict)
            or not isinstance(schema_data.get("data"), dict)
            or not isinstance(schema_data["data"].get("__schema"), dict)
        ):
            raise ValueError("Invalid schema JSON structure: Could not find 'data.__schema'")
        self.raw_schema = schema_data["data"]["__schema"]

    @classmethod
    def from_file(cls, full_schema_path):
        """Loads a cached introspection JSON file from disk."""
        with open(full_schema_path, "r", encoding="utf-8") as f:
            return cls(json.load(f))

    def parse(self) -> Schema:
        """Main entry point: builds the immutable type graph."""
        types = tuple(
            self._parse_type(tdef)
            for tdef in self.raw_schema.get("types") or []
            if tdef.get("name")
        )
        directives = tuple(
            DirectiveDef(
                name=ddef["name"],
                locations=tuple(ddef.get("locations") or ()),
                args=self._parse_args(ddef.get("args")),
                description=ddef.get("description"),
            )
            for ddef in self.raw_schema.get("directives") or []
        )
        schema = Schema(
            types=types,
            directives=directives,
            query_type_name=self._root_name("queryType"),
            mutation_type_name=self._root_name("mutationType"),
            subscription_type_name=self._root_name("subscriptionType"),
        )
        log.debug(f"Parsed {len(types)} types and {len(directives)} directives")
        return schema

    def _root_name(self, key):
        root = self.raw_schema.get(key)
        if isinstance(root, dict):
            return root.get("name")
        return None

    def _parse_type(self, tdef) -> TypeDef:
        fields = tdef.get("fields")
        input_fields = tdef.get("inputFields")
        enum_values = tdef.get("enumValues")
        return TypeDef(
            name=tdef["name"],
            kind=tdef.get("kind"),
            fields=None if fields is None else tuple(self._parse_field(f) for f in fields),
            input_fields=None if input_fields is None else self._parse_args(input_fields),
            enum_values=None if enum_values is None else tuple(v["name"] for v in enum_values),
            interfaces=self._names(tdef.get("interfaces")),
            possible_types=self._names(tdef.get("possibleTypes")),
            description=tdef.get("description"),
        )

    def _parse_field(self, fdef) -> Field:
        return Field(
            name=fdef["name"],
            type=self._resolve_type(fdef.get("type")),
            args=self._parse_args(fdef.get("args")),
            description=fdef.get("description"),
            is_deprecated=bool(fdef.get("isDeprecated")),
        )

    def _parse_args(self, adefs):
        return tuple(
            Arg(
                name=adef["name"],
                type=self._resolve_type(adef.get("type")),
                default_value=adef.get("defaultValue"),
                description=adef.get("description"),
            )
            for adef in adefs or []
        )

    @staticmethod
    def _names(type_refs):
        return tuple(t["name"] for t in type_refs or [] if t.get("name"))

    def _resolve_type(self, type_ref):
        if not type_ref or not isinstance(type_ref, dict):
            return None

        kind = type_ref.get("kind")
        of_type = type_ref.get("ofType")

        if kind == "NON_NULL":
            return NonNullTypeRef(self._resolve_type(of_type))

        if kind == "LIST":
            return ListTypeRef(self._resolve_type(of_type))

        return NamedTypeRef(kind=kind, name=type_ref.get("name"))
