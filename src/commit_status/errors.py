"""Error types raised while resolving inputs and publishing a status.

Configuration errors are deterministic: retrying will not help, so they
abort the run before any request is made. StatusResponseError marks a
response that came back without the shape we rely on.

HTTP-level errors live with the client in commit_status/github/client.py.
"""

from typing import List, Optional


class CommitStatusError(Exception):
    """Base class for all errors raised by the action."""


class ConfigurationError(CommitStatusError):
    """Raised when the action inputs or environment are unusable."""


class UnsupportedStateError(ConfigurationError):
    """Raised when a state value has no commit status equivalent.

    Attributes:
        value: The raw state value that was rejected.
    """

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"state value not supported: {value}")


class MissingEnvironmentError(ConfigurationError):
    """Raised when a fallback environment variable is not set.

    Attributes:
        variable: Name of the environment variable that was looked up.
    """

    def __init__(self, variable: str, message: Optional[str] = None):
        self.variable = variable
        super().__init__(message or f"{variable} environment variable not set")


class MissingOwnerError(MissingEnvironmentError):
    """No owner input and no owner in the environment."""


class MissingRepositoryError(MissingEnvironmentError):
    """No repository input and no repository in the environment."""


class MissingCommitError(MissingEnvironmentError):
    """No sha input and no commit sha in the environment."""


class RequiredInputsError(ConfigurationError):
    """Raised when one or more required inputs are empty.

    All violations are collected so the user can fix every input in a
    single pass. The rendered message joins them with ", " in the order
    they were checked.

    Attributes:
        errors: Individual violation messages, in check order.
    """

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__(", ".join(self.errors))


class StatusResponseError(CommitStatusError):
    """Raised when a create-status response does not have the expected shape.

    These are never retried: the service answered, just not with a status.
    """


class EmptyStatusIDError(StatusResponseError):
    """Raised when GitHub accepts a status but returns no id for it."""

    def __init__(self, message: str = "created status has an empty ID"):
        super().__init__(message)


class MalformedStatusError(StatusResponseError):
    """Raised when a successful response body is not a status object."""
