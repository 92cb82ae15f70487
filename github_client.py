import logging
from typing import Any

import httpx

from config import Settings

logger = logging.getLogger(__name__)


REPO_LIMIT = 5


def _build_headers(settings: Settings) -> dict[str, str]:
    headers = {
        "Accept": "application/vnd.github+json",
        "User-Agent": "devconnector-profile-api",
    }
    if settings.github_token:
        headers["Authorization"] = f"token {settings.github_token}"
    return headers


def fetch_user_repos(username: str, settings: Settings) -> list[dict[str, Any]]:
    url = f"{settings.github_api_url}/users/{username}/repos"
    params = {"per_page": REPO_LIMIT, "sort": "created", "direction": "asc"}

    logger.info("GitHub request url=%s username=%s", url, username)
    try:
        with httpx.Client(timeout=settings.github_timeout_seconds, follow_redirects=True) as client:
            resp = client.get(url, params=params, headers=_build_headers(settings))

            logger.info("GitHub HTTP %s returned status=%d", url, resp.status_code)

            if resp.status_code >= 400:
                logger.error("GitHub error response: %s", resp.text[:1000])
                raise RuntimeError(f"GitHub repos request failed: HTTP {resp.status_code}")

            repos = resp.json()
    except Exception:
        logger.exception("GitHub request failed for username=%s", username)
        raise

    if not isinstance(repos, list):
        raise RuntimeError("GitHub repos response format is invalid; expected a list of repositories.")

    logger.info("GitHub returned repo_count=%d username=%s", len(repos), username)
    return repos
