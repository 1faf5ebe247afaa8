"""Unit tests for the action entry point."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import httpx

from commit_status.config import ActionSettings
from commit_status.github.client import GitHubAPIError, GitHubClient
from commit_status.github.models import RepoStatus, StatusCreateRequest
from commit_status.main import _default_client_factory, run
from commit_status.state import CommitState


def run_async(coro):
    return asyncio.run(coro)


RUNNER_ENV = {
    "INPUT_TOKEN": "ghp_test",
    "INPUT_STATE": "cancelled",
    "INPUT_CONTEXT": "ci/tests",
    "INPUT_DESCRIPTION": "",
    "INPUT_DETAILS_URL": "",
    "GITHUB_REPOSITORY_OWNER": "octocat",
    "GITHUB_REPOSITORY": "octocat/hello-world",
    "GITHUB_SHA": "abc123",
}


def _settings(**overrides) -> ActionSettings:
    values = dict(max_retries=5, retry_base_delay=1.0)
    values.update(overrides)
    return ActionSettings(**values)


def _factory(client):
    factory = MagicMock(return_value=client)
    return factory


def _client(**kwargs) -> AsyncMock:
    client = AsyncMock()
    client.create_status.configure_mock(**kwargs)
    return client


class TestRun:
    def test_publishes_and_returns_zero(self, no_sleep, caplog):
        client = _client(return_value=RepoStatus(id=24601, state="error"))
        factory = _factory(client)

        with caplog.at_level("INFO"):
            code = run_async(
                run(RUNNER_ENV, client_factory=factory, sleep=no_sleep, settings=_settings())
            )

        assert code == 0
        factory.assert_called_once()
        assert factory.call_args.args[0] == "ghp_test"
        client.create_status.assert_awaited_once_with(
            "octocat",
            "hello-world",
            "abc123",
            StatusCreateRequest(state=CommitState.ERROR, context="ci/tests"),
        )
        client.close.assert_awaited_once()
        assert (
            "Updated status:\nID: 24601\nState: error\n"
            "URL: https://github.com/octocat/hello-world/commits/abc123"
        ) in caplog.messages

    def test_masks_token(self, no_sleep, capsys):
        client = _client(return_value=RepoStatus(id=1))

        run_async(run(RUNNER_ENV, client_factory=_factory(client), sleep=no_sleep, settings=_settings()))

        assert "::add-mask::ghp_test" in capsys.readouterr().out

    def test_validation_failure_returns_one(self, no_sleep, caplog):
        env = {k: v for k, v in RUNNER_ENV.items() if k not in ("INPUT_TOKEN", "INPUT_STATE")}
        factory = MagicMock()

        with caplog.at_level("ERROR"):
            code = run_async(run(env, client_factory=factory, sleep=no_sleep, settings=_settings()))

        assert code == 1
        factory.assert_not_called()
        assert "token is a required field, state is a required field" in caplog.messages

    def test_unsupported_state_returns_one(self, no_sleep, caplog):
        env = {**RUNNER_ENV, "INPUT_STATE": "done"}
        factory = MagicMock()

        with caplog.at_level("ERROR"):
            code = run_async(run(env, client_factory=factory, sleep=no_sleep, settings=_settings()))

        assert code == 1
        factory.assert_not_called()
        assert "state value not supported: done" in caplog.messages

    def test_missing_owner_returns_one(self, no_sleep, caplog):
        env = {k: v for k, v in RUNNER_ENV.items() if k != "GITHUB_REPOSITORY_OWNER"}

        with caplog.at_level("ERROR"):
            code = run_async(run(env, client_factory=MagicMock(), sleep=no_sleep, settings=_settings()))

        assert code == 1
        assert "GITHUB_REPOSITORY_OWNER environment variable not set" in caplog.messages

    def test_publish_failure_returns_one_and_closes_client(self, no_sleep):
        client = _client(side_effect=GitHubAPIError("GitHub API error: 500"))

        code = run_async(
            run(
                RUNNER_ENV,
                client_factory=_factory(client),
                sleep=no_sleep,
                settings=_settings(max_retries=2),
            )
        )

        assert code == 1
        assert client.create_status.await_count == 3
        assert no_sleep.delays == [1.0, 1.0]
        client.close.assert_awaited_once()

    def test_missing_status_id_returns_one(self, no_sleep, caplog):
        client = _client(return_value=RepoStatus())

        with caplog.at_level("ERROR"):
            code = run_async(
                run(RUNNER_ENV, client_factory=_factory(client), sleep=no_sleep, settings=_settings())
            )

        assert code == 1
        assert client.create_status.await_count == 1
        assert "created status has an empty ID" in caplog.messages

    def test_invalid_settings_return_one(self, no_sleep, monkeypatch):
        monkeypatch.setenv("COMMIT_STATUS_MAX_RETRIES", "-3")

        code = run_async(run(RUNNER_ENV, client_factory=MagicMock(), sleep=no_sleep))

        assert code == 1

    def test_reads_process_environment_by_default(self, no_sleep, monkeypatch):
        for name, value in RUNNER_ENV.items():
            monkeypatch.setenv(name, value)
        client = _client(return_value=RepoStatus(id=7))

        code = run_async(run(client_factory=_factory(client), sleep=no_sleep))

        assert code == 0

    def test_malformed_response_returns_one(self, no_sleep, caplog):
        def client_factory(token, settings):
            return GitHubClient(
                token=token,
                base_url=settings.api_url,
                transport=httpx.MockTransport(
                    lambda request: httpx.Response(200, text="<html>proxy</html>")
                ),
            )

        with caplog.at_level("ERROR"):
            code = run_async(
                run(RUNNER_ENV, client_factory=client_factory, sleep=no_sleep, settings=_settings())
            )

        assert code == 1
        assert no_sleep.delays == []
        assert any("unexpected create-status response" in m for m in caplog.messages)

    def test_unexpected_client_error_returns_one(self, no_sleep, caplog):
        client = _client(side_effect=RuntimeError("boom"))

        with caplog.at_level("ERROR"):
            code = run_async(
                run(
                    RUNNER_ENV,
                    client_factory=_factory(client),
                    sleep=no_sleep,
                    settings=_settings(max_retries=1),
                )
            )

        assert code == 1
        assert client.create_status.await_count == 2
        assert "RuntimeError: boom" in caplog.messages
        client.close.assert_awaited_once()


class TestDefaultClientFactory:
    def test_uses_settings(self):
        client = _default_client_factory(
            "ghp_test",
            _settings(api_url="https://ghe.example.com/api/v3", timeout=5.0),
        )

        assert isinstance(client, GitHubClient)
        assert client.token == "ghp_test"
        assert client.base_url == "https://ghe.example.com/api/v3"
        assert client.timeout == 5.0
