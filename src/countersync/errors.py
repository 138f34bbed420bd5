class CounterSyncError(Exception):
    """Base class for every error the tool reports to the operator."""
    pass


class DiscoveryError(CounterSyncError):
    """No usable endpoint or credential could be found on the scanned page."""
    pass


class AuthenticationError(CounterSyncError):
    """None of the supported authentication mechanisms is available."""
    pass


class TransportError(CounterSyncError):
    """A request to the GraphQL endpoint failed before a GraphQL response was received."""
    pass


class IntrospectionError(TransportError):
    """The introspection request failed or returned something that is not a schema."""
    pass
