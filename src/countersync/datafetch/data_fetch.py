import requests

from countersync import log
from countersync.errors import TransportError

SENSITIVE_HEADERS = {"x-api-key", "authorization", "x-amz-security-token"}


def mask_value(value):
    """Credential value safe to log: only its first four characters are kept."""
    return f"{value[:4]}..."


def mask_headers(headers):
    """Copy of ``headers`` safe to log."""
    masked = {}
    for key, value in headers.items():
        if key.lower() in SENSITIVE_HEADERS and value:
            masked[key] = mask_value(value)
        else:
            masked[key] = value
    return masked


class DataFetch:
    """Sends GraphQL documents to a single endpoint.

    Every request is a JSON POST. Authentication is either a static header
    (``x-api-key``) passed in ``headers`` or a ``requests`` auth hook such as
    :class:`countersync.datafetch.signing.SigV4RequestAuth`.
    """

    def __init__(self, endpoint, headers=None, auth=None, timeout=30):
        self.endpoint = endpoint
        self.headers = dict(headers or {})
        self.auth = auth
        self.timeout = timeout
        self.session = requests.Session()

    def _build_headers(self):
        headers = {"Content-Type": "application/json"}
        headers.update(self.headers)
        return headers

    def post(self, payload):
        """
        POSTs a raw JSON payload and returns the decoded GraphQL response.

        A body carrying ``data`` or ``errors`` is returned even when the HTTP
        status is an error, since GraphQL servers report auth and validation
        problems that way.

        :raises TransportError: on network failure, or an HTTP error without a GraphQL body.
        """
        headers = self._build_headers()
        log.debug(f"Request: endpoint={self.endpoint} headers={mask_headers(headers)}")
        try:
            response = self.session.post(
                self.endpoint,
                json=payload,
                headers=headers,
                auth=self.auth,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TransportError(f"Request to {self.endpoint} failed: {e}") from e

        try:
            result = response.json()
        except ValueError:
            result = None

        if isinstance(result, dict) and ("data" in result or "errors" in result):
            return result

        if not response.ok:
            raise TransportError(
                f"Query failed: {response.status_code}\n{response.text}"
            )
        raise TransportError(f"Endpoint {self.endpoint} did not return a GraphQL response")

    def execute(self, operation):
        """Sends an assembled :class:`~countersync.translators.query_builder.OperationDocument`."""
        return self.post(operation.to_payload())
