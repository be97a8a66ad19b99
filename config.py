"""
Stack configuration loaded from pulumi.Config().

Provides a typed, immutable view of stack settings. All settings are read from
Pulumi config (e.g. Pulumi.<stack>.yaml or pulumi config set). project_name,
environment and bucket_name are required; everything else has a default.
Values are validated here so a bad setting aborts the program before any
resource is registered. Used by __main__.main() to name resources, pick the
HTTPS or HTTP variant, and build the CDN policy.
"""

from dataclasses import dataclass, field
from typing import Any, Callable

import pulumi

from components import CdnPolicy
from components._helpers import (
    HTTPS,
    parse_domains,
    parse_protocol,
    sanitize_bucket_name,
)


def _parse_bool(key: str, raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    value = str(raw).strip().lower()
    if value in ("1", "true", "yes"):
        return True
    if value in ("0", "false", "no"):
        return False
    raise ValueError(f"{key}: expected a boolean, got {raw!r}")


def _parse_int(key: str, raw: Any) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{key}: expected an integer, got {raw!r}") from exc


def _require_str(config: pulumi.Config, key: str) -> str:
    return config.require(key)


def _optional(default: Any, parse: Callable[[str, Any], Any] | None = None):
    """Parser for a key with a default; parse(key, raw) converts set values."""

    def parser(config: pulumi.Config, key: str) -> Any:
        raw = config.get(key)
        if raw is None or raw == "":
            return default
        return parse(key, raw) if parse else raw

    return parser


def _optional_or_unset(default: str):
    """Parser for a key with a default; an explicit empty value means None."""

    def parser(config: pulumi.Config, key: str) -> str | None:
        raw = config.get(key)
        if raw is None:
            return default
        return raw.strip() or None

    return parser


# (key, parser); parser receives (config, key) and returns value.
_CONFIG_SPEC: list[tuple[str, Callable[[pulumi.Config, str], Any]]] = [
    ("project_name", _require_str),
    ("environment", _require_str),
    ("bucket_name", _require_str),
    ("protocol", _optional(HTTPS)),
    ("domains", _optional("")),
    ("bucket_location", _optional("US")),
    ("force_destroy", _optional(False, _parse_bool)),
    ("main_page_suffix", _optional_or_unset("index.html")),
    ("not_found_page", _optional_or_unset("404.html")),
    ("compression_mode", _optional("AUTOMATIC")),
    ("cache_id_header", _optional("X-Cache-ID")),
    ("reserve_ip", _optional(True, _parse_bool)),
    ("http_redirect", _optional(True, _parse_bool)),
]

# Keys folded into CdnPolicy.
_CDN_SPEC: list[tuple[str, Callable[[pulumi.Config, str], Any]]] = [
    ("cache_mode", _optional("CACHE_ALL_STATIC")),
    ("client_ttl", _optional(3600, _parse_int)),
    ("default_ttl", _optional(3600, _parse_int)),
    ("max_ttl", _optional(86400, _parse_int)),
    ("serve_while_stale", _optional(86400, _parse_int)),
    ("negative_caching", _optional(True, _parse_bool)),
    ("request_coalescing", _optional(True, _parse_bool)),
]


@dataclass(frozen=True)
class StackConfig:
    """
    Stack configuration from Pulumi config.

    Attributes:
        project_name: Project name used in resource naming (required).
        environment: Environment label used in resource naming (required).
        bucket_name: GCS bucket name (required; must be globally unique).
        protocol: "https" (managed certificate, port 443) or "http" (port 80).
        domains: Certificate domains; required when protocol is "https".
        bucket_location: Bucket multi-region or region.
        force_destroy: Allow destroying a non-empty bucket.
        main_page_suffix: Index object for directory requests; an empty
            value leaves it unset.
        not_found_page: Object served for missing keys; an empty value
            leaves it unset.
        compression_mode: Backend bucket compression, AUTOMATIC or DISABLED.
        cache_id_header: Response header reporting the CDN cache id.
        reserve_ip: Reserve a global static IP for the forwarding rules.
        http_redirect: HTTPS only; redirect port 80 to HTTPS.
        cdn_policy: Cache mode and TTLs for the backend bucket.
    """

    project_name: str
    environment: str
    bucket_name: str
    protocol: str = HTTPS
    domains: list[str] = field(default_factory=list)
    bucket_location: str = "US"
    force_destroy: bool = False
    main_page_suffix: str | None = "index.html"
    not_found_page: str | None = "404.html"
    compression_mode: str = "AUTOMATIC"
    cache_id_header: str = "X-Cache-ID"
    reserve_ip: bool = True
    http_redirect: bool = True
    cdn_policy: CdnPolicy = field(default_factory=CdnPolicy)

    def __post_init__(self):
        if self.protocol == HTTPS:
            if not self.domains:
                raise ValueError("domains: at least one domain is required for https")
            if self.http_redirect and not self.reserve_ip:
                raise ValueError("http_redirect requires reserve_ip")

    @classmethod
    def from_pulumi_config(cls, config: pulumi.Config) -> "StackConfig":
        """
        Build StackConfig from pulumi.Config(). Raises ValueError on invalid values.
        """
        kwargs = {key: parser(config, key) for key, parser in _CONFIG_SPEC}
        kwargs["protocol"] = parse_protocol(kwargs["protocol"])
        kwargs["domains"] = parse_domains(kwargs["domains"])
        kwargs["bucket_name"] = sanitize_bucket_name(kwargs["bucket_name"])
        kwargs["cdn_policy"] = CdnPolicy(
            **{key: parser(config, key) for key, parser in _CDN_SPEC}
        )
        return cls(**kwargs)
