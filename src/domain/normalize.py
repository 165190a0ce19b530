"""Normalization helpers for user-supplied profile values."""

import hashlib
from urllib.parse import urlencode, urlsplit, urlunsplit

GRAVATAR_BASE_URL = "https://www.gravatar.com/avatar"

_DEFAULT_PORTS = {"http": 80, "https": 443}


def normalize_url(value: str) -> str:
    """Normalize a URL to a canonical absolute HTTPS form.

    ``"www.Example.com/me/"`` and ``"http://example.com/me"`` both become
    ``"https://example.com/me"``. Blank input is returned as an empty string.
    """
    value = value.strip()
    if not value:
        return ""

    if value.startswith("//"):
        value = f"https:{value}"
    elif "://" not in value:
        value = f"https://{value}"

    parts = urlsplit(value)
    scheme = parts.scheme.lower()
    if scheme == "http":
        scheme = "https"

    host = (parts.hostname or "").lower()
    if host.startswith("www."):
        host = host[len("www."):]

    netloc = host
    if parts.port and parts.port != _DEFAULT_PORTS.get(scheme):
        netloc = f"{host}:{parts.port}"
    if parts.username:
        userinfo = parts.username
        if parts.password:
            userinfo = f"{userinfo}:{parts.password}"
        netloc = f"{userinfo}@{netloc}"

    path = parts.path.rstrip("/")
    return urlunsplit((scheme, netloc, path, parts.query, parts.fragment))


def split_skills(skills: str | list[str]) -> list[str]:
    """Turn a comma-separated skill string into a list, preserving order.

    Lists are passed through unchanged.
    """
    if isinstance(skills, list):
        return skills
    return [skill.strip() for skill in skills.split(",") if skill.strip()]


def gravatar_url(email: str, size: int = 200, rating: str = "pg", default: str = "mm") -> str:
    """Build the gravatar avatar URL for an email address."""
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    query = urlencode({"s": size, "r": rating, "d": default})
    return f"{GRAVATAR_BASE_URL}/{digest}?{query}"
