"""Builders for raw introspection payloads and a scripted prompter shared by the tests."""


def named(kind, name):
    return {"kind": kind, "name": name, "ofType": None}


def scalar(name):
    return named("SCALAR", name)


def obj(name):
    return named("OBJECT", name)


def enum(name):
    return named("ENUM", name)


def non_null(type_ref):
    return {"kind": "NON_NULL", "name": None, "ofType": type_ref}


def list_of(type_ref):
    return {"kind": "LIST", "name": None, "ofType": type_ref}


def arg(name, type_ref, default=None):
    return {"name": name, "description": None, "type": type_ref, "defaultValue": default}


def field(name, type_ref, args=()):
    return {
        "name": name,
        "description": None,
        "args": list(args),
        "type": type_ref,
        "isDeprecated": False,
        "deprecationReason": None,
    }


def object_type(name, fields):
    return {
        "kind": "OBJECT",
        "name": name,
        "description": None,
        "fields": list(fields),
        "inputFields": None,
        "interfaces": [],
        "enumValues": None,
        "possibleTypes": None,
    }


def scalar_type(name):
    return {
        "kind": "SCALAR",
        "name": name,
        "description": None,
        "fields": None,
        "inputFields": None,
        "interfaces": None,
        "enumValues": None,
        "possibleTypes": None,
    }


def enum_type(name, values):
    return {
        "kind": "ENUM",
        "name": name,
        "description": None,
        "fields": None,
        "inputFields": None,
        "interfaces": None,
        "enumValues": [{"name": v, "description": None, "isDeprecated": False, "deprecationReason": None} for v in values],
        "possibleTypes": None,
    }


BUILTIN_SCALAR_TYPES = [scalar_type(n) for n in ("String", "Int", "Float", "Boolean", "ID")]


def payload(types, query="Query", mutation=None, subscription=None, directives=()):
    return {
        "data": {
            "__schema": {
                "queryType": {"name": query} if query else None,
                "mutationType": {"name": mutation} if mutation else None,
                "subscriptionType": {"name": subscription} if subscription else None,
                "types": list(types) + BUILTIN_SCALAR_TYPES,
                "directives": list(directives),
            }
        }
    }


def user_schema_payload():
    """
    type Query { getUser(id: ID!): User  listUsers(limit: Int): [User] }
    type Mutation { createUser(name: String!, age: Int): User }
    type User { id: ID  name: String  role: Role  posts: [Post] }
    type Post { title: String  author: User }
    """
    return payload(
        [
            object_type("Query", [
                field("getUser", obj("User"), [arg("id", non_null(scalar("ID")))]),
                field("listUsers", list_of(obj("User")), [arg("limit", scalar("Int"))]),
            ]),
            object_type("Mutation", [
                field("createUser", obj("User"), [
                    arg("name", non_null(scalar("String"))),
                    arg("age", scalar("Int")),
                ]),
            ]),
            object_type("User", [
                field("id", scalar("ID")),
                field("name", scalar("String")),
                field("role", enum("Role")),
                field("posts", list_of(obj("Post"))),
            ]),
            object_type("Post", [
                field("title", scalar("String")),
                field("author", obj("User")),
            ]),
            enum_type("Role", ["ADMIN", "MEMBER"]),
        ],
        query="Query",
        mutation="Mutation",
    )


class ScriptExhausted(Exception):
    pass


class ScriptedPrompter:
    """Answers prompts from fixed scripts; mirrors Prompter's auto-resolution of single choices."""

    def __init__(self, picks=(), texts=None, depths=(), confirms=()):
        self.picks = list(picks)
        self.texts = dict(texts or {})
        self.depths = list(depths)
        self.confirms = list(confirms)
        self.asked = []

    def _next(self, script):
        if not script:
            raise ScriptExhausted()
        return script.pop(0)

    def pick_value(self, values, message):
        values = list(values)
        if not values:
            return None
        if len(values) == 1:
            return values[0]
        self.asked.append(message)
        choice = self._next(self.picks)
        assert choice in values, f"{choice!r} not offered in {values!r}"
        return choice

    def ask_text(self, name, required=False, type_label=None):
        self.asked.append(name)
        return self.texts.get(name, "")

    def ask_depth(self, default=2):
        return self._next(self.depths)

    def confirm(self, message, default=False):
        return self._next(self.confirms)
