"""
Static CDN - GCS bucket behind a CDN-enabled global load balancer.

Wires three ComponentResources using Pulumi config and output chaining:

- **StaticBucket**: multi-region bucket with uniform access, world-readable
  through an allUsers objectViewer binding. Its name feeds the backend bucket.
- **CdnBackend**: backend bucket with Cloud CDN (cache mode, TTLs, coalescing,
  compression, cache-id header) and a URL map routing everything to it. The
  URL map id feeds the frontend.
- **HttpsFrontend** or **HttpFrontend**: chosen by the ``protocol`` setting.
  HTTPS adds a managed certificate for ``domains`` and, optionally, a port-80
  redirect to HTTPS.

Stack exports: bucket_name, bucket_url, backend_bucket_id, ip_address, urls.
"""

import pulumi

from components import CdnBackend, HttpFrontend, HttpsFrontend, StaticBucket
from components._helpers import HTTPS, resource_name
from config import StackConfig


def main():
    """
    Build the bucket, CDN backend and frontend, and export stack outputs.

    Reads config, instantiates each component in dependency order (bucket ->
    backend bucket/URL map -> proxy/forwarding rule), and exports the bucket,
    the public IP and the site URLs.
    """
    config = StackConfig.from_pulumi_config(pulumi.Config())

    def name(prefix: str) -> str:
        return resource_name(prefix, config.project_name, config.environment)

    pulumi.log.info(
        f"provisioning {config.protocol} variant for bucket {config.bucket_name}"
    )

    site = StaticBucket(
        name=name("site"),
        bucket_name=config.bucket_name,
        location=config.bucket_location,
        force_destroy=config.force_destroy,
        main_page_suffix=config.main_page_suffix,
        not_found_page=config.not_found_page,
    )

    cdn = CdnBackend(
        name=name("cdn"),
        bucket_name=site.bucket_name,
        policy=config.cdn_policy,
        compression_mode=config.compression_mode,
        cache_id_header_name=config.cache_id_header,
    )

    if config.protocol == HTTPS:
        pulumi.log.info(f"managed certificate domains: {', '.join(config.domains)}")
        frontend = HttpsFrontend(
            name=name("lb"),
            url_map=cdn.url_map_id,
            domains=config.domains,
            reserve_ip=config.reserve_ip,
            http_redirect=config.http_redirect,
        )
    else:
        pulumi.log.warn("http variant: content is served without TLS")
        if config.domains:
            pulumi.log.warn("domains is ignored for the http variant")
        frontend = HttpFrontend(
            name=name("lb"),
            url_map=cdn.url_map_id,
            reserve_ip=config.reserve_ip,
        )

    for output_name, value in [
        ("bucket_name", site.bucket_name),
        ("bucket_url", site.bucket_url),
        ("backend_bucket_id", cdn.backend_bucket_id),
        ("ip_address", frontend.ip_address),
        ("urls", frontend.urls),
    ]:
        pulumi.export(output_name, value)


if __name__ == "__main__":
    main()
