"""Request and response models for the commit status API.

See https://docs.github.com/en/rest/commits/statuses
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from commit_status.state import CommitState


class StatusCreateRequest(BaseModel):
    """Body of POST /repos/{owner}/{repo}/statuses/{sha}.

    Attributes:
        state: Canonical commit state.
        context: Label that identifies the check.
        description: Short description shown next to the status.
        target_url: Link to the build or test run.
    """

    state: CommitState = Field(
        ...,
        description="The state of the status",
    )

    context: str = Field(
        default="",
        description="Label to differentiate this status from others",
    )

    description: str = Field(
        default="",
        description="Short description of the status",
    )

    target_url: str = Field(
        default="",
        description="URL associated with this status",
    )

    def to_payload(self) -> Dict[str, Any]:
        """Build the JSON body, leaving out empty optional fields.

        GitHub applies its own defaults ("default" context, no link) when
        a field is absent, and rejects an empty target_url.
        """
        payload: Dict[str, Any] = {"state": self.state.value}
        if self.context:
            payload["context"] = self.context
        if self.description:
            payload["description"] = self.description
        if self.target_url:
            payload["target_url"] = self.target_url
        return payload


class RepoStatus(BaseModel):
    """A commit status as returned by GitHub.

    Only `id` is relied upon; every field is optional so that a partial
    response still parses and can be rejected by the caller.
    """

    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    node_id: Optional[str] = None
    state: Optional[str] = None
    context: Optional[str] = None
    description: Optional[str] = None
    target_url: Optional[str] = None
    url: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_github_response(cls, data: Dict[str, Any]) -> "RepoStatus":
        """Parse the JSON body of a create-status response."""
        return cls.model_validate(data)
