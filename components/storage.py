"""
GCS static content: storage bucket + public read grant.

This component creates a multi-region Cloud Storage bucket with uniform
bucket-level access and grants ``roles/storage.objectViewer`` to
``allUsers`` so every object is world-readable. With uniform access there are
no per-object ACLs; the IAM binding is the only access rule. The
``bucket_name`` output is an ``Output[str]`` so the CDN component can bind a
backend bucket to it.
"""

import pulumi
import pulumi_gcp as gcp

ID: str = "staticcdn:gcp:StaticBucket"

PUBLIC_READ_ROLE: str = "roles/storage.objectViewer"
PUBLIC_MEMBER: str = "allUsers"


class StaticBucket(pulumi.ComponentResource):
    """
    Cloud Storage bucket (uniform access, STANDARD class) readable by anyone.

    Resources: Bucket, BucketIAMMember.
    """

    def __init__(
        self,
        name: str,
        bucket_name: str,
        location: str = "US",
        force_destroy: bool = False,
        main_page_suffix: str | None = "index.html",
        not_found_page: str | None = "404.html",
        opts: pulumi.ResourceOptions | None = None,
    ):
        """
        Create the bucket and the public read binding.

        Args:
            name: Pulumi resource name prefix for the bucket and its binding.
            bucket_name: Globally unique GCS bucket name (already validated).
            location: Bucket location; a multi-region such as "US" or "EU".
            force_destroy: If True, destroying the stack deletes the bucket
                even when it still holds objects.
            main_page_suffix: Object served for directory-style requests.
                None leaves website config unset.
            not_found_page: Object served when a key is missing.

        Outputs (set on self, registered for the component):
            bucket_name: Bucket name, consumed by the backend bucket.
            bucket_url: ``gs://`` URL for uploads.
        """
        super().__init__(ID, name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        website = None
        if main_page_suffix or not_found_page:
            website = gcp.storage.BucketWebsiteArgs(
                main_page_suffix=main_page_suffix,
                not_found_page=not_found_page,
            )

        self.bucket = gcp.storage.Bucket(
            resource_name=f"{name}-bucket",
            name=bucket_name,
            location=location,
            storage_class="STANDARD",
            uniform_bucket_level_access=True,
            force_destroy=force_destroy,
            website=website,
            opts=child_opts,
        )

        # Bucket-level binding; with uniform access objects inherit it.
        self.public_read = gcp.storage.BucketIAMMember(
            resource_name=f"{name}-public-read",
            bucket=self.bucket.name,
            role=PUBLIC_READ_ROLE,
            member=PUBLIC_MEMBER,
            opts=child_opts,
        )

        self.bucket_name: pulumi.Output[str] = self.bucket.name
        self.bucket_url: pulumi.Output[str] = pulumi.Output.concat(
            "gs://", self.bucket.name
        )
        self.register_outputs(
            {
                "bucket_name": self.bucket_name,
                "bucket_url": self.bucket_url,
            }
        )
