"""Report a commit's build status to GitHub from a workflow.

The pipeline, in order:
- normalize_state: map workflow states onto commit status states
- resolve_config: read inputs, fill owner/repository/sha from the
  environment, validate required fields
- publish_status: create the status with bounded fibonacci retry
"""

from commit_status.errors import (
    CommitStatusError,
    ConfigurationError,
    EmptyStatusIDError,
    MalformedStatusError,
    MissingCommitError,
    MissingOwnerError,
    MissingRepositoryError,
    RequiredInputsError,
    StatusResponseError,
    UnsupportedStateError,
)
from commit_status.inputs import resolve_config, strip_owner_prefix
from commit_status.models import StatusConfig
from commit_status.publisher import PublishResult, publish_status
from commit_status.state import CommitState, normalize_state
from commit_status.validation import validate_required_inputs

__all__ = [
    "CommitState",
    "CommitStatusError",
    "ConfigurationError",
    "EmptyStatusIDError",
    "MalformedStatusError",
    "MissingCommitError",
    "MissingOwnerError",
    "MissingRepositoryError",
    "PublishResult",
    "RequiredInputsError",
    "StatusConfig",
    "StatusResponseError",
    "UnsupportedStateError",
    "normalize_state",
    "publish_status",
    "resolve_config",
    "strip_owner_prefix",
    "validate_required_inputs",
]
