import json
import os
import hashlib
import importlib.resources as pkg_resources
import tempfile
from pathlib import Path

from countersync import log
from countersync.errors import IntrospectionError, TransportError

COUNTERSYNC_HOME = Path.home() / ".countersync"


def endpoint_hash(endpoint):
    """SHA-1 hex digest of the endpoint URL, used as the cache file stem."""
    return hashlib.sha1(endpoint.encode()).hexdigest()


def load_introspection_query():
    query_file = pkg_resources.files("countersync.introspection").joinpath("introspection_query.graphql")
    with query_file.open("r") as file:
        return file.read()


class GraphQLIntrospection:
    """
    Handles fetching and caching of GraphQL schemas via introspection.

    A cached schema is trusted until its file is removed by hand.
    """
    def __init__(self, fetcher, cache_dir=COUNTERSYNC_HOME):
        """
        Initializes the introspection handler.
        :param fetcher: DataFetch bound to the GraphQL endpoint (headers and signing included).
        :param cache_dir: Directory where introspection responses are stored.
        """
        self.fetcher = fetcher
        self.endpoint = fetcher.endpoint
        self.cache_dir = Path(cache_dir)
        self.schema_filename = f"{endpoint_hash(self.endpoint)}.json"
        self.schema_path = self.cache_dir / self.schema_filename

    def fetch_schema(self):
        """
        Performs the introspection query and saves the raw response.
        :return: The decoded introspection response.
        """
        try:
            schema = self.fetcher.post({"query": load_introspection_query()})
        except TransportError as e:
            raise IntrospectionError(f"Unable to perform the introspection query: {e}") from e

        if not isinstance(schema.get("data"), dict) or not isinstance(schema["data"].get("__schema"), dict):
            errors = schema.get("errors")
            raise IntrospectionError(f"Invalid schema response from GraphQL endpoint: {errors or schema}")

        self._write_cache(schema)

        log.info(f"✅ GraphQL schema saved to {self.schema_path}")
        return schema

    def load_schema(self):
        """
        Loads the cached schema from file if available, otherwise fetches a new one.
        :return: The decoded introspection response.
        """
        if self.schema_path.exists():
            log.info(f"Using cached schema {self.schema_path}")
            return self._read_cache()

        log.info("⚠️ No cached schema found. Fetching...")
        return self.fetch_schema()

    def _write_cache(self, schema):
        """Writes next to the cache file and renames, so readers never see a partial file."""
        os.makedirs(self.cache_dir, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.cache_dir, prefix=f".{self.schema_filename}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as file:
                json.dump(schema, file)
            os.replace(tmp_path, self.schema_path)
        except BaseException:
            os.unlink(tmp_path)
            raise

    def _read_cache(self):
        try:
            with open(self.schema_path, "r", encoding="utf-8") as file:
                schema = json.load(file)
        except (OSError, json.JSONDecodeError) as e:
            raise IntrospectionError(
                f"Cached schema {self.schema_path} is unreadable ({e}); delete it to fetch the schema again"
            ) from e

        if not isinstance(schema, dict) or not isinstance(schema.get("data"), dict) \
                or not isinstance(schema["data"].get("__schema"), dict):
            raise IntrospectionError(
                f"Cached schema {self.schema_path} holds no introspection data; delete it to fetch the schema again"
            )
        return schema
