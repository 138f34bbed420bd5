from urllib.parse import urlparse

from botocore.auth import SigV4Auth
from botocore.awsrequest import AWSRequest
from botocore.credentials import Credentials
from requests.auth import AuthBase

DEFAULT_SIGNING_SERVICE = "appsync"


def region_from_endpoint(endpoint):
    """
    Reads the AWS region out of an AppSync endpoint URL.

    ``https://<id>.appsync-api.us-east-1.amazonaws.com/graphql`` -> ``us-east-1``
    """
    host = urlparse(endpoint).netloc or endpoint
    parts = host.split(".")
    if len(parts) < 3:
        raise ValueError(f"Cannot derive an AWS region from endpoint: {endpoint}")
    return parts[2]


class SigV4RequestAuth(AuthBase):
    """``requests`` auth hook that signs each outgoing request with AWS Signature V4."""

    def __init__(self, access_key_id, secret_access_key, region, service=DEFAULT_SIGNING_SERVICE, session_token=None):
        self.credentials = Credentials(access_key_id, secret_access_key, session_token)
        self.region = region
        self.service = service

    @classmethod
    def for_endpoint(cls, endpoint, access_key_id, secret_access_key, service=DEFAULT_SIGNING_SERVICE):
        return cls(access_key_id, secret_access_key, region_from_endpoint(endpoint), service=service)

    def __call__(self, r):
        aws_request = AWSRequest(
            method=r.method,
            url=r.url,
            data=r.body,
            headers={"Content-Type": r.headers.get("Content-Type", "application/json")},
        )
        SigV4Auth(self.credentials, self.service, self.region).add_auth(aws_request)
        r.headers.update(dict(aws_request.headers.items()))
        return r
