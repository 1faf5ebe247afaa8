"""Resolve action inputs into a validated StatusConfig.

Inputs and environment are passed in as plain callables so the resolver
never touches os.environ itself:

    config = resolve_config(get_input, os.environ.get)

Owner, repository and sha fall back to the variables the GitHub Actions
runner sets for every job. Those fallbacks fail fast, one at a time.
Token and state are checked afterwards by validate_required_inputs,
which reports both when both are missing.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from pydantic import SecretStr

from commit_status.errors import (
    MissingCommitError,
    MissingOwnerError,
    MissingRepositoryError,
)
from commit_status.models import StatusConfig
from commit_status.state import normalize_state
from commit_status.validation import validate_required_inputs

logger = logging.getLogger(__name__)

InputSource = Callable[[str], str]
EnvironmentReader = Callable[[str], Optional[str]]

OWNER_ENV = "GITHUB_REPOSITORY_OWNER"
REPOSITORY_ENV = "GITHUB_REPOSITORY"
COMMIT_ENV = "GITHUB_SHA"


@dataclass(frozen=True)
class EnvBindings:
    """Names of the environment variables used as input defaults."""

    owner: str = OWNER_ENV
    repository: str = REPOSITORY_ENV
    commit: str = COMMIT_ENV


def strip_owner_prefix(repository: str, owner: str) -> str:
    """Remove a leading "<owner>/" from a repository name.

    GITHUB_REPOSITORY holds "owner/name", while the status API wants the
    bare name. Anything that does not start with the prefix is returned
    unchanged.
    """
    prefix = f"{owner}/"
    if repository.startswith(prefix):
        return repository[len(prefix):]
    return repository


def _env_default(get_env: EnvironmentReader, name: str) -> Optional[str]:
    value = get_env(name)
    if not value:
        return None
    return value


def resolve_config(
    get_input: InputSource,
    get_env: EnvironmentReader,
    bindings: EnvBindings = EnvBindings(),
) -> StatusConfig:
    """Assemble and validate the configuration for one run.

    Args:
        get_input: Returns the value of an action input, "" when unset.
        get_env: Returns an environment variable, None when unset.
        bindings: Environment variable names used for defaults.

    Returns:
        A fully populated, validated StatusConfig.

    Raises:
        UnsupportedStateError: If the state input cannot be normalized.
        MissingOwnerError: If no owner is given and none is in the environment.
        MissingRepositoryError: Same, for the repository, or when only the
            owner prefix was given.
        MissingCommitError: Same, for the commit sha.
        RequiredInputsError: If token and/or state are empty.
    """
    token = get_input("token")
    raw_state = get_input("state")
    owner = get_input("owner")
    repository = get_input("repository")
    sha = get_input("sha")

    # An empty state is left for the required-field check to report
    state = normalize_state(raw_state) if raw_state else None
    if state is not None and state.value != raw_state:
        logger.info(
            "Reporting state %r as %r",
            raw_state,
            state.value,
            extra={"raw_state": raw_state, "state": state.value},
        )

    if not owner:
        owner = _env_default(get_env, bindings.owner)
        if owner is None:
            raise MissingOwnerError(bindings.owner)

    if not repository:
        repository = _env_default(get_env, bindings.repository)
        if repository is None:
            raise MissingRepositoryError(bindings.repository)

    if not sha:
        sha = _env_default(get_env, bindings.commit)
        if sha is None:
            raise MissingCommitError(bindings.commit)

    repository = strip_owner_prefix(repository, owner)
    if not repository:
        raise MissingRepositoryError(
            bindings.repository,
            f'repository name is empty after removing owner prefix "{owner}/"',
        )

    config = StatusConfig(
        token=SecretStr(token),
        state=state,
        context=get_input("context"),
        description=get_input("description"),
        owner=owner,
        repository=repository,
        sha=sha,
        details_url=get_input("details_url"),
    )

    validate_required_inputs(config)

    logger.debug(
        "Resolved status configuration",
        extra={
            "owner": config.owner,
            "repository": config.repository,
            "sha": config.sha,
            "context": config.context,
        },
    )
    return config
