"""
Cloud CDN: backend bucket + URL map.

This component binds a Cloud Storage bucket to the load-balancing layer
through a backend bucket with Cloud CDN enabled, and routes every request to
it with a single-rule URL map. The CDN policy (cache mode, TTLs,
serve-while-stale, negative caching, request coalescing) is described by
``CdnPolicy``, validated when it is built. Responses carry a custom header
with the serving cache id so cache hits can be traced from the client.

``url_map_id`` is an ``Output[str]`` consumed by the HTTP/HTTPS frontends.
"""

from dataclasses import dataclass

import pulumi
import pulumi_gcp as gcp

from components._helpers import (
    CACHE_MODES,
    COMPRESSION_MODES,
    cache_id_header,
    validate_cdn_ttls,
)

ID: str = "staticcdn:gcp:CdnBackend"

# Cloud CDN rejects explicit TTLs when caching is driven by origin headers,
# and max_ttl unless the mode is CACHE_ALL_STATIC.
_ORIGIN_HEADERS_MODE = "USE_ORIGIN_HEADERS"
_CACHE_ALL_STATIC_MODE = "CACHE_ALL_STATIC"


@dataclass(frozen=True)
class CdnPolicy:
    """
    Cache settings for the backend bucket.

    Attributes:
        cache_mode: CACHE_ALL_STATIC, USE_ORIGIN_HEADERS or FORCE_CACHE_ALL.
        client_ttl: Max-age sent to clients, in seconds.
        default_ttl: TTL for responses without cache headers, in seconds.
        max_ttl: Upper bound for any cached response, in seconds.
        serve_while_stale: How long stale content may be served while it is
            revalidated, in seconds.
        negative_caching: Cache 404/410 and similar error responses.
        request_coalescing: Collapse concurrent cache-fill requests.
    """

    cache_mode: str = "CACHE_ALL_STATIC"
    client_ttl: int = 3600
    default_ttl: int = 3600
    max_ttl: int = 86400
    serve_while_stale: int = 86400
    negative_caching: bool = True
    request_coalescing: bool = True

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Raise ValueError if the cache mode or TTLs are not accepted by Cloud CDN."""
        if self.cache_mode not in CACHE_MODES:
            raise ValueError(
                f"cache_mode must be one of {CACHE_MODES}, got {self.cache_mode!r}"
            )
        validate_cdn_ttls(
            client_ttl=self.client_ttl,
            default_ttl=self.default_ttl,
            max_ttl=self.max_ttl,
            serve_while_stale=self.serve_while_stale,
            compare_to_max=self.cache_mode == _CACHE_ALL_STATIC_MODE,
        )

    def to_args(self) -> gcp.compute.BackendBucketCdnPolicyArgs:
        """
        Build the provider args.

        USE_ORIGIN_HEADERS sends no TTLs; FORCE_CACHE_ALL sends no max_ttl.
        """
        ttls = {}
        if self.cache_mode != _ORIGIN_HEADERS_MODE:
            ttls["client_ttl"] = self.client_ttl
            ttls["default_ttl"] = self.default_ttl
        if self.cache_mode == _CACHE_ALL_STATIC_MODE:
            ttls["max_ttl"] = self.max_ttl
        return gcp.compute.BackendBucketCdnPolicyArgs(
            cache_mode=self.cache_mode,
            serve_while_stale=self.serve_while_stale,
            negative_caching=self.negative_caching,
            request_coalescing=self.request_coalescing,
            **ttls,
        )


class CdnBackend(pulumi.ComponentResource):
    """
    Backend bucket with Cloud CDN and a default-route URL map.

    Resources: BackendBucket, URLMap.
    """

    def __init__(
        self,
        name: str,
        bucket_name: str | pulumi.Output[str],
        policy: CdnPolicy | None = None,
        compression_mode: str = "AUTOMATIC",
        cache_id_header_name: str = "X-Cache-ID",
        opts: pulumi.ResourceOptions | None = None,
    ):
        """
        Create the backend bucket and URL map.

        Args:
            name: Pulumi resource name; also the base of the GCP resource
                names (must already be a valid compute name).
            bucket_name: Storage bucket to serve, e.g. StaticBucket.bucket_name.
            policy: CDN cache policy; defaults to CdnPolicy().
            compression_mode: AUTOMATIC (gzip/brotli at the edge) or DISABLED.
            cache_id_header_name: Response header that reports the cache id.

        Outputs (set on self, registered for the component):
            backend_bucket_id: Backend bucket id.
            url_map_id: URL map id, target of the frontend proxies.
        """
        policy = policy or CdnPolicy()
        if compression_mode not in COMPRESSION_MODES:
            raise ValueError(
                f"compression_mode must be one of {COMPRESSION_MODES}, "
                f"got {compression_mode!r}"
            )
        header = cache_id_header(cache_id_header_name)

        super().__init__(ID, name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        self.backend_bucket = gcp.compute.BackendBucket(
            resource_name=f"{name}-backend",
            name=f"{name}-backend",
            description=f"Cloud CDN backend for {name}",
            bucket_name=bucket_name,
            enable_cdn=True,
            cdn_policy=policy.to_args(),
            compression_mode=compression_mode,
            custom_response_headers=[header],
            opts=child_opts,
        )

        # Single rule: every host and path goes to the backend bucket.
        self.url_map = gcp.compute.URLMap(
            resource_name=f"{name}-urlmap",
            name=f"{name}-urlmap",
            default_service=self.backend_bucket.id,
            opts=child_opts,
        )

        self.backend_bucket_id: pulumi.Output[str] = self.backend_bucket.id
        self.url_map_id: pulumi.Output[str] = self.url_map.id
        self.register_outputs(
            {
                "backend_bucket_id": self.backend_bucket_id,
                "url_map_id": self.url_map_id,
            }
        )
