"""URL canonicalization shared by scoring and history."""

from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

TRACKING_PARAMS = frozenset({"ref", "source"})


def _is_tracking_param(name: str) -> bool:
    return name.startswith("utm_") or name in TRACKING_PARAMS


def normalize_url(url: str) -> str:
    """
    Canonicalize a URL so the same resource compares equal across backends.

    Lowercases scheme and host, drops tracking query parameters (``utm_*``,
    ``ref``, ``source``) and the fragment. Anything that does not parse as an absolute URL is returned
    unchanged.

    Args:
        url: Raw URL as returned by a discovery backend

    Returns:
        Canonical URL string
    """
    try:
        parts = urlsplit(url)
        if not parts.scheme or not parts.netloc:
            return url
        # Accessing the port validates it
        parts.port
    except (TypeError, ValueError, AttributeError):
        return url

    # Scheme and host are case-insensitive, userinfo and path are not
    userinfo, at, hostport = parts.netloc.rpartition("@")
    netloc = userinfo + at + hostport.lower()

    query = [
        (key, value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
        if not _is_tracking_param(key)
    ]
    return urlunsplit((parts.scheme.lower(), netloc, parts.path, urlencode(query), ""))


def domain_of(url: str) -> str:
    """Return the hostname without a leading ``www.``, or empty string."""
    try:
        host = urlsplit(url).hostname or ""
    except (TypeError, ValueError, AttributeError):
        return ""
    return host[4:] if host.startswith("www.") else host
