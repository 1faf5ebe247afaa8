"""Resolved action configuration.

The models use Pydantic for validation, consistent with the GitHub API
models in github/models.py and the runtime settings in config.py.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from commit_status.state import CommitState


class StatusConfig(BaseModel):
    """Everything needed to publish one commit status.

    Built once per run from the action inputs plus environment defaults,
    validated once, then handed to the publisher. Instances are frozen.

    Attributes:
        token: GitHub token used to authenticate the request.
        state: Canonical state, or None when no state was supplied.
        context: Label that identifies the check on the commit.
        description: Short human-readable description of the status.
        owner: Repository owner (user or organization).
        repository: Repository name without the owner prefix.
        sha: Commit the status is attached to.
        details_url: Link shown as "Details" next to the status.
    """

    model_config = ConfigDict(frozen=True)

    token: SecretStr = Field(
        default=SecretStr(""),
        description="GitHub token (never logged)",
    )

    state: Optional[CommitState] = Field(
        default=None,
        description="Canonical commit state",
    )

    context: str = Field(
        default="",
        description="Status context label",
    )

    description: str = Field(
        default="",
        description="Status description",
    )

    owner: str = Field(
        default="",
        description="Repository owner",
    )

    repository: str = Field(
        default="",
        description="Repository name without owner prefix",
    )

    sha: str = Field(
        default="",
        description="Commit sha",
    )

    details_url: str = Field(
        default="",
        description="Target URL for the status (may be empty)",
    )
