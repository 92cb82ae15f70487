import re
from datetime import date, datetime, time, timezone
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit


_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z\d+\-.]*://")
_DEFAULT_PORTS = {"80", "443"}


class InvalidUrlError(ValueError):
    pass


def normalize_url(value: str) -> str:
    """Return ``value`` as an absolute https URL.

    Adds a missing scheme, forces ``https``, lowercases the host, drops a
    leading ``www.``, default ports, the trailing slash and sorts the query
    string so equivalent inputs are stored identically.

    Raises ``InvalidUrlError`` when no host or a malformed port is given.
    """
    url = value.strip()
    if url.startswith("//"):
        url = "https:" + url
    elif not _SCHEME_RE.match(url):
        url = "https://" + url

    try:
        parts = urlsplit(url)
        hostname = parts.hostname
        port = parts.port
    except ValueError as exc:
        raise InvalidUrlError(f"Invalid URL: {value!r}") from exc
    if not hostname:
        raise InvalidUrlError(f"Invalid URL: {value!r}")

    host = hostname.lower()
    if host.startswith("www.") and host.count(".") >= 2:
        host = host[4:]
    if ":" in host:
        # IPv6 literal
        host = f"[{host}]"

    netloc = host
    if port is not None and str(port) not in _DEFAULT_PORTS:
        netloc = f"{host}:{port}"
    if parts.username:
        auth = parts.username
        if parts.password:
            auth = f"{auth}:{parts.password}"
        netloc = f"{auth}@{netloc}"

    path = re.sub(r"/{2,}", "/", parts.path).rstrip("/")
    query = urlencode(sorted(parse_qsl(parts.query, keep_blank_values=True)))

    return urlunsplit(("https", netloc, path, query, parts.fragment))


def parse_skills(skills: list[str] | str) -> list[str]:
    if isinstance(skills, list):
        return skills
    return [skill.strip() for skill in skills.split(",") if skill.strip()]


def to_utc_naive(value: date | datetime) -> datetime:
    # BSON stores naive datetimes as UTC and has no date-only type
    if not isinstance(value, datetime):
        return datetime.combine(value, time())
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value
