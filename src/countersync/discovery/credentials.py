import re

import requests

from countersync import log
from countersync.errors import DiscoveryError

_REGION = r"(?:us|ap|ca|eu)-(?:central|east|west|south|northeast|southeast)-(?:1|2)"

PATTERNS = {
    "access_key_id": re.compile(r"(?:'A|\"A)(?:SIA|KIA|IDA|ROA)[JI][A-Z0-9]{14}[AQ]['\"]"),
    "secret_access_key": re.compile(r"['\"][a-z0-9A-Z+/]{40}['\"]"),
    "user_pool_id": re.compile(rf"['\"]{_REGION}_[a-zA-Z0-9]{{9}}['\"]"),
    "identity_pool_id": re.compile(
        rf"['\"]{_REGION}:[a-f0-9]{{8}}-[a-f0-9]{{4}}-[a-f0-9]{{4}}-[a-f0-9]{{4}}-[a-f0-9]{{12}}['\"]"
    ),
    "hosted_ui": re.compile(r"['\"]https://[^ ]+?/login\?[^ ]*?client_id=[a-z0-9]{26}[^ ]"),
    "cognito_domain": re.compile(rf"['\"]https://[a-z0-9\-]+\.auth\.{_REGION}\.amazoncognito\.com"),
    "appsync_graphql": re.compile(
        rf"['\"]https://[a-z0-9]{{20,}}\.appsync-api\.{_REGION}\.amazonaws\.com/graphql['\"]"
    ),
    "graphql_apikey": re.compile(r"['\"]da2-[a-z0-9]{26}['\"]"),
}

_QUOTES = re.compile(r"[\"']")


def fetch_page(url, timeout=30):
    """Downloads the page to scan. Raises :class:`DiscoveryError` when it cannot be fetched."""
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise DiscoveryError(f"Unable to fetch {url}: {e}") from e
    return response.text


class CredentialDiscovery:
    """Finds AppSync endpoints and AWS credentials embedded in a page (usually a JS bundle)."""

    def __init__(self, page_text):
        self.page_text = page_text

    def candidates(self, pattern):
        """Matches for ``pattern`` with quotes stripped, deduplicated in first-seen order."""
        matches = (_QUOTES.sub("", m.group(0)) for m in PATTERNS[pattern].finditer(self.page_text))
        return list(dict.fromkeys(matches))

    def retrieve(self, pattern, prompter, question, none_message):
        """
        Lets the operator pick one match for ``pattern``.

        :return: The chosen value, or ``None`` when nothing matched.
        """
        options = self.candidates(pattern)
        if not options:
            log.info(f"[-] {none_message}")
            return None
        return prompter.pick_value(options, question)
