from unittest.mock import patch

import httpx
import pytest

from conftest import TEST_SETTINGS
from config import Settings
from github_client import REPO_LIMIT, fetch_user_repos


def _response(status_code: int, **kwargs) -> httpx.Response:
    request = httpx.Request("GET", "https://api.github.com/users/ada/repos")
    return httpx.Response(status_code, request=request, **kwargs)


class TestFetchUserRepos:
    def test_returns_repo_list(self):
        repos = [{"name": "engine"}, {"name": "notes"}]
        with patch("github_client.httpx.Client") as client_cls:
            client = client_cls.return_value.__enter__.return_value
            client.get.return_value = _response(200, json=repos)

            assert fetch_user_repos("ada", TEST_SETTINGS) == repos

        url = client.get.call_args.args[0]
        params = client.get.call_args.kwargs["params"]
        headers = client.get.call_args.kwargs["headers"]
        assert url == "https://api.github.com/users/ada/repos"
        assert params == {"per_page": REPO_LIMIT, "sort": "created", "direction": "asc"}
        assert "Authorization" not in headers
        assert client_cls.call_args.kwargs["timeout"] == TEST_SETTINGS.github_timeout_seconds

    def test_sends_configured_token(self):
        settings = Settings(**{**TEST_SETTINGS.__dict__, "github_token": "ghp_secret"})
        with patch("github_client.httpx.Client") as client_cls:
            client = client_cls.return_value.__enter__.return_value
            client.get.return_value = _response(200, json=[])

            fetch_user_repos("ada", settings)

        assert client.get.call_args.kwargs["headers"]["Authorization"] == "token ghp_secret"

    def test_error_status_raises(self):
        with patch("github_client.httpx.Client") as client_cls:
            client = client_cls.return_value.__enter__.return_value
            client.get.return_value = _response(404, json={"message": "Not Found"})

            with pytest.raises(RuntimeError):
                fetch_user_repos("nobody", TEST_SETTINGS)

    def test_non_list_body_raises(self):
        with patch("github_client.httpx.Client") as client_cls:
            client = client_cls.return_value.__enter__.return_value
            client.get.return_value = _response(200, json={"message": "API rate limit exceeded"})

            with pytest.raises(RuntimeError):
                fetch_user_repos("ada", TEST_SETTINGS)

    def test_network_error_propagates(self):
        with patch("github_client.httpx.Client") as client_cls:
            client = client_cls.return_value.__enter__.return_value
            client.get.side_effect = httpx.ConnectError("boom")

            with pytest.raises(httpx.ConnectError):
                fetch_user_repos("ada", TEST_SETTINGS)
