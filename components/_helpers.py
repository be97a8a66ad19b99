"""
Pure helpers for naming, domains, and CDN settings. Testable without Pulumi runtime.

Used by the storage component (sanitize_bucket_name), the CDN component
(cache_id_header, validate_cdn_ttls), the frontends (port_range, site_url)
and config.py (parse_domains, parse_protocol). No Pulumi types; all functions
accept and return plain Python types so they can be unit-tested without a
Pulumi stack.
"""

import re

HTTPS = "https"
HTTP = "http"
PROTOCOLS: tuple[str, ...] = (HTTPS, HTTP)

_PORTS: dict[str, str] = {HTTPS: "443", HTTP: "80"}

CACHE_MODES: tuple[str, ...] = (
    "CACHE_ALL_STATIC",
    "USE_ORIGIN_HEADERS",
    "FORCE_CACHE_ALL",
)
COMPRESSION_MODES: tuple[str, ...] = ("AUTOMATIC", "DISABLED")

# Compute API limits, in seconds.
MAX_CDN_TTL: int = 31_622_400
MAX_SERVE_WHILE_STALE: int = 604_800

_BUCKET_NAME_RE = re.compile(r"^[a-z0-9][a-z0-9._-]{1,61}[a-z0-9]$")


def resource_name(
    *parts: str,
    max_len: int = 63,
) -> str:
    """
    Join parts into a GCP compute resource name.

    Compute names must match ``[a-z]([-a-z0-9]*[a-z0-9])?`` and be at most 63
    characters. Parts are lowercased, disallowed characters become hyphens,
    repeated hyphens collapse, and the result is truncated.

    Args:
        parts: Name segments (e.g. "static", "site", "dev").
        max_len: Maximum length (default 63 per Compute Engine).

    Returns:
        Sanitized name (e.g. "static-site-dev").

    Raises:
        ValueError: If nothing usable is left or it does not start with a letter.
    """
    joined = "-".join(parts).lower()
    cleaned = re.sub(r"[^a-z0-9-]+", "-", joined)
    cleaned = re.sub(r"-{2,}", "-", cleaned).strip("-")[:max_len].rstrip("-")
    if not cleaned or not cleaned[0].isalpha():
        raise ValueError(f"cannot build a resource name from {parts!r}")
    return cleaned


def sanitize_bucket_name(
    name: str,
) -> str:
    """
    Validate a GCS bucket name and return it lowercased.

    Bucket names are 3-63 characters of lowercase letters, digits, dots,
    hyphens and underscores, starting and ending with a letter or digit.
    Names starting with "goog" are reserved by Google.
    """
    candidate = name.strip().lower()
    if not _BUCKET_NAME_RE.match(candidate):
        raise ValueError(f"invalid bucket name: {name!r}")
    if candidate.startswith("goog"):
        raise ValueError(f"bucket names may not start with 'goog': {name!r}")
    return candidate


def parse_protocol(
    value: str,
) -> str:
    """Normalize a protocol setting to "https" or "http"."""
    protocol = value.strip().lower()
    if protocol not in PROTOCOLS:
        raise ValueError(f"protocol must be one of {PROTOCOLS}, got {value!r}")
    return protocol


def parse_domains(
    raw: str | list[str] | None,
) -> list[str]:
    """
    Parse a domain list from config.

    Accepts a comma-separated string or a list (structured config). Entries
    are stripped, lowercased and de-duplicated in order; a trailing dot is
    removed since managed certificates take plain host names.
    """
    if raw is None:
        return []
    items = raw.split(",") if isinstance(raw, str) else list(raw)
    domains: list[str] = []
    for item in items:
        domain = str(item).strip().lower().rstrip(".")
        if domain and domain not in domains:
            domains.append(domain)
    return domains


def port_range(
    protocol: str,
) -> str:
    """Return the forwarding-rule port for the protocol ("443" or "80")."""
    return _PORTS[parse_protocol(protocol)]


def site_url(
    protocol: str,
    host: str,
) -> str:
    """Build the public URL for a host, e.g. "https://cdn.example.com/"."""
    return f"{parse_protocol(protocol)}://{host}/"


def cache_id_header(
    header: str,
) -> str:
    """
    Return the custom response header carrying the CDN cache id.

    Cloud CDN substitutes ``{cdn_cache_id}`` with the serving cache location,
    e.g. "X-Cache-ID: {cdn_cache_id}".
    """
    name = header.strip()
    if not name or ":" in name or " " in name:
        raise ValueError(f"invalid header name: {header!r}")
    return f"{name}: {{cdn_cache_id}}"


def validate_cdn_ttls(
    client_ttl: int,
    default_ttl: int,
    max_ttl: int,
    serve_while_stale: int,
    compare_to_max: bool = True,
) -> None:
    """
    Check CDN TTLs against Cloud CDN rules.

    All values are seconds and must be non-negative. TTLs are capped at
    MAX_CDN_TTL and serve-while-stale at MAX_SERVE_WHILE_STALE by the API.
    client_ttl and default_ttl may not exceed max_ttl; pass
    compare_to_max=False for cache modes where max_ttl is not sent.
    """
    ttls = {
        "client_ttl": client_ttl,
        "default_ttl": default_ttl,
        "max_ttl": max_ttl,
    }
    for key, value in ttls.items():
        if value < 0:
            raise ValueError(f"{key} must be >= 0, got {value}")
        if value > MAX_CDN_TTL:
            raise ValueError(f"{key} must be <= {MAX_CDN_TTL}, got {value}")
    if serve_while_stale < 0:
        raise ValueError(f"serve_while_stale must be >= 0, got {serve_while_stale}")
    if serve_while_stale > MAX_SERVE_WHILE_STALE:
        raise ValueError(
            f"serve_while_stale must be <= {MAX_SERVE_WHILE_STALE}, "
            f"got {serve_while_stale}"
        )
    if not compare_to_max:
        return
    if client_ttl > max_ttl:
        raise ValueError(f"client_ttl ({client_ttl}) exceeds max_ttl ({max_ttl})")
    if default_ttl > max_ttl:
        raise ValueError(f"default_ttl ({default_ttl}) exceeds max_ttl ({max_ttl})")
