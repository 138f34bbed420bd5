from countersync import log
from countersync.browser.browse import BROWSABLE_KINDS, GraphQLBrowser
from countersync.datafetch.data_fetch import DataFetch, mask_value
from countersync.datafetch.signing import DEFAULT_SIGNING_SERVICE, SigV4RequestAuth
from countersync.discovery.credentials import CredentialDiscovery, fetch_page
from countersync.errors import AuthenticationError, DiscoveryError, IntrospectionError
from countersync.introspection.introspection import COUNTERSYNC_HOME, GraphQLIntrospection
from countersync.introspection.schema_parser import SchemaParser

API_KEY_AUTH = "API Key"
IAM_AUTH = "AWS IAM Credentials"


class AppSyncExplorer:
    """
    Connects all components together:
    - Scans a page for an AppSync endpoint and credentials.
    - Picks an authentication mechanism (API key or signed IAM requests).
    - Loads the introspection schema, from cache when possible.
    - Hands the parsed schema to the interactive browser.
    """

    def __init__(self, prompter, console=None, cache_dir=COUNTERSYNC_HOME, timeout=30,
                 signing_service=DEFAULT_SIGNING_SERVICE):
        self.prompter = prompter
        self.console = console
        self.cache_dir = cache_dir
        self.timeout = timeout
        self.signing_service = signing_service

    def discover_endpoint(self, discovery):
        endpoint = discovery.retrieve(
            "appsync_graphql",
            self.prompter,
            "Which GraphQL endpoint do you want to use?",
            "No AppSync GraphQL endpoint found on the supplied page.",
        )
        if not endpoint:
            raise DiscoveryError("No AppSync GraphQL endpoint found on the supplied page.")
        log.info(f"[+] Found AppSync GraphQL Endpoint: {endpoint}")
        return endpoint

    def discover_auth(self, discovery):
        """
        Collects the usable authentication mechanisms, keyed by name.

        A secret access key is only looked for once an access key id was found.
        """
        auth_types = {}

        api_key = discovery.retrieve(
            "graphql_apikey",
            self.prompter,
            "Which GraphQL API Key do you want to use?",
            "No AppSync GraphQL API Key found on the supplied page.",
        )
        if api_key:
            auth_types[API_KEY_AUTH] = api_key
            log.info(f"[+] Found API Key: {api_key}")

        access_key_id = discovery.retrieve(
            "access_key_id",
            self.prompter,
            "Which Access Key ID do you want to use?",
            "No IAM Access Key ID found on the supplied page.",
        )
        if access_key_id:
            secret_access_key = discovery.retrieve(
                "secret_access_key",
                self.prompter,
                "Which Secret Access Key do you want to use?",
                "No IAM Secret Access Key found on the supplied page.",
            )
            if secret_access_key:
                auth_types[IAM_AUTH] = (access_key_id, secret_access_key)
                log.info(f"[+] Found Access Key ID: {access_key_id}")
                log.info(f"[+] Found Secret Access Key: {mask_value(secret_access_key)}")

        if not auth_types:
            raise AuthenticationError("No valid authentication mechanisms were detected.")
        return auth_types

    def build_fetcher(self, endpoint, auth_types):
        auth_type = self.prompter.pick_value(list(auth_types), "Which authentication type do you want to use?")
        log.info(f"[+] Authenticating with {auth_type}...")

        if auth_type == API_KEY_AUTH:
            return DataFetch(endpoint, headers={"x-api-key": auth_types[API_KEY_AUTH]}, timeout=self.timeout)

        access_key_id, secret_access_key = auth_types[IAM_AUTH]
        signer = SigV4RequestAuth.for_endpoint(
            endpoint, access_key_id, secret_access_key, service=self.signing_service
        )
        return DataFetch(endpoint, auth=signer, timeout=self.timeout)

    def load_schema(self, fetcher):
        introspection = GraphQLIntrospection(fetcher, cache_dir=self.cache_dir)
        payload = introspection.load_schema()
        log.info("[+] Successfully retrieved GraphQL Schema.")

        try:
            schema = SchemaParser(payload).parse()
        except ValueError as e:
            raise IntrospectionError(f"{e}; delete {introspection.schema_path} to fetch the schema again") from e
        for kind in BROWSABLE_KINDS + ("subscription",):
            count = len(schema.actions(kind))
            if count > 0:
                log.info(f"[*] Found {count} {kind} action(s)")
        return schema

    def explore(self, url):
        """
        Runs discovery, authentication and introspection, then browses until interrupted.

        :return: ``False`` when the schema offers nothing to browse.
        """
        discovery = CredentialDiscovery(fetch_page(url, timeout=self.timeout))
        endpoint = self.discover_endpoint(discovery)
        fetcher = self.build_fetcher(endpoint, self.discover_auth(discovery))
        schema = self.load_schema(fetcher)
        return GraphQLBrowser(schema, fetcher, self.prompter, self.console).run()
