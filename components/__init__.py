"""
Static content delivery components for GCP.

Each concern is encapsulated in its own ComponentResource for clear ownership,
testability, and reuse. Use from the Pulumi entrypoint (e.g. __main__.py) with
config and output chaining:

- **StaticBucket**: public-read Cloud Storage bucket; exposes bucket_name for
  the backend bucket.
- **CdnBackend**: backend bucket with Cloud CDN + default-route URL map;
  exposes url_map_id for the frontends.
- **HttpsFrontend** / **HttpFrontend**: target proxy and global forwarding
  rule (managed certificate on the HTTPS variant); expose ip_address and urls.
"""

from components.cdn import CdnBackend, CdnPolicy
from components.frontend import HttpFrontend, HttpsFrontend
from components.storage import StaticBucket

__all__ = ["CdnBackend", "CdnPolicy", "HttpFrontend", "HttpsFrontend", "StaticBucket"]
