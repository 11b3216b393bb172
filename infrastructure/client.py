"""Abstract base class for network-facing clients.

The Client ABC marks every object in this repository that talks to a remote
service (the HTTP transport, the LinxPay token manager and the LinxPay API
client) so they share one type for injection and type checks.
"""

from abc import ABC


class Client(ABC):  # noqa: B024
    """Marker base class for client implementations.

    Subclasses own a remote resource (an HTTP session, cached credentials)
    and may override ``close`` to release it. Supports use as a context
    manager so callers can scope the resource with ``with``.

    Note: This is intentionally a marker interface with no abstract methods.
    """

    def close(self) -> None:
        """Release any resources held by the client. No-op by default."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
