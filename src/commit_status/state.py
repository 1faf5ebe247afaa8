"""Commit status states and normalization of workflow states.

GitHub commit statuses accept exactly four states. Workflow authors tend
to pass `${{ job.status }}`, which can also be `cancelled` or `skipped`,
so those (and the shorthand `cancel`) are reported as `error`.
"""

from enum import Enum

from commit_status.errors import UnsupportedStateError


class CommitState(str, Enum):
    """States accepted by the GitHub commit status API.

    Attributes:
        ERROR: The run could not complete (also used for cancelled runs).
        FAILURE: The run completed and failed.
        PENDING: The run is in progress.
        SUCCESS: The run completed and passed.
    """

    ERROR = "error"
    FAILURE = "failure"
    PENDING = "pending"
    SUCCESS = "success"


# Workflow states with no commit status equivalent
STATE_ALIASES = {
    "cancel": CommitState.ERROR,
    "cancelled": CommitState.ERROR,
    "skipped": CommitState.ERROR,
}


def normalize_state(raw_state: str) -> CommitState:
    """Map a raw state string to a commit status state.

    Matching is exact; `Success` is not `success`.

    Args:
        raw_state: State as supplied to the action.

    Returns:
        The canonical CommitState.

    Raises:
        UnsupportedStateError: If the value is neither a canonical state
            nor a known alias.
    """
    try:
        return CommitState(raw_state)
    except ValueError:
        pass

    if raw_state in STATE_ALIASES:
        return STATE_ALIASES[raw_state]

    raise UnsupportedStateError(raw_state)
