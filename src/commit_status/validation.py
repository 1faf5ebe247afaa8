"""Required-field validation for the resolved configuration."""

from typing import List

from commit_status.errors import RequiredInputsError
from commit_status.models import StatusConfig

TOKEN_REQUIRED = "token is a required field"
STATE_REQUIRED = "state is a required field"


def validate_required_inputs(config: StatusConfig) -> None:
    """Check required fields and report every missing one at once.

    Owner, repository and sha are not checked here: the resolver has
    already filled them from the environment or failed.

    Args:
        config: The assembled configuration.

    Raises:
        RequiredInputsError: If any required field is empty. The message
            lists the violations in check order, joined with ", ".
    """
    errors: List[str] = []

    if not config.token.get_secret_value():
        errors.append(TOKEN_REQUIRED)

    if not config.state:
        errors.append(STATE_REQUIRED)

    if errors:
        raise RequiredInputsError(errors)
