"""Exceptions raised while talking to SW360 and mirroring a dependency tree into it."""
from typing import Optional


class Sw360Error(Exception):
    """Base class for SW360 synchronization errors."""


class ConfigurationError(Sw360Error):
    """Error raised when the SW360 REST url or token is not configured."""

    def __init__(self, message: str) -> None:
        """Initialize the error.

        Args:
            message: Error message
        """
        super().__init__(f"SW360 configuration error: {message}")


class RemoteOperationError(Sw360Error):
    """Error raised when a SW360 REST call does not succeed."""

    def __init__(self, operation: str, status_code: Optional[int], response_body: str) -> None:
        """Initialize the error.

        Args:
            operation: Description of the attempted call, e.g. "Sw360ReleaseApiClient.get_release id=abc"
            status_code: HTTP status of the response, None if no response was received
            response_body: Response body text (or the transport error message)
        """
        self.operation = operation
        self.status_code = status_code
        self.response_body = response_body
        super().__init__(
            f"{operation} failed: status_code={status_code}, response_body=\"{response_body}\""
        )


class PaginationConsistencyError(Sw360Error):
    """Error raised when a paged listing changes while it is being fetched."""

    def __init__(self, operation: str, reason: str) -> None:
        self.operation = operation
        self.reason = reason
        super().__init__(f"{operation}: {reason}")


class StructuralInvariantError(Sw360Error):
    """Error raised when a dependency tree node has an unexpected shape or position."""


class MissingLinkError(Sw360Error):
    """Error raised when an entity has no usable hypermedia link."""

    def __init__(self, link_name: str, url: Optional[str] = None) -> None:
        self.link_name = link_name
        self.url = url
        if url is None:
            super().__init__(f"The '{link_name}' link url is missing")
        else:
            super().__init__(f"The '{link_name}' link url has no id segment. url={url}")


class MissingFieldError(Sw360Error):
    """Error raised when a required JSON field is absent."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"The specified key={key} does not exist in this node")


class DelayInterruptedError(Sw360Error):
    """Error raised when the throttling delay before a package upload is interrupted."""


class SourceDownloadError(Sw360Error):
    """Error raised when the sources of a package cannot be fetched."""
