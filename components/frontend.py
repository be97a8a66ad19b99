"""
Global load balancer frontends: target proxy + forwarding rule.

Two variants point a public IP at a URL map (e.g. CdnBackend.url_map_id):

- ``HttpsFrontend``: Google-managed TLS certificate for the given domains,
  target HTTPS proxy, and a port-443 forwarding rule. Optionally a second,
  redirect-only URL map behind a target HTTP proxy on port 80 so plain HTTP
  requests are sent to HTTPS.
- ``HttpFrontend``: target HTTP proxy and a port-80 forwarding rule. No TLS.

Both can reserve a global static IP so the address survives replacement of the
proxy or rule; otherwise Google assigns an ephemeral one. The managed
certificate only becomes ACTIVE once the domains resolve to ``ip_address``.
"""

import pulumi
import pulumi_gcp as gcp

from components._helpers import HTTP, HTTPS, port_range, site_url

HTTPS_ID: str = "staticcdn:gcp:HttpsFrontend"
HTTP_ID: str = "staticcdn:gcp:HttpFrontend"

LOAD_BALANCING_SCHEME: str = "EXTERNAL"

# Google-managed certificates accept at most this many domains.
MAX_CERTIFICATE_DOMAINS: int = 100

UrlMapRef = str | pulumi.Output[str]


def _reserve_address(
    name: str,
    opts: pulumi.ResourceOptions,
) -> gcp.compute.GlobalAddress:
    return gcp.compute.GlobalAddress(
        resource_name=f"{name}-ip",
        name=f"{name}-ip",
        address_type="EXTERNAL",
        ip_version="IPV4",
        opts=opts,
    )


def _forwarding_rule(
    name: str,
    protocol: str,
    target: pulumi.Output[str],
    address: gcp.compute.GlobalAddress | None,
    opts: pulumi.ResourceOptions,
) -> gcp.compute.GlobalForwardingRule:
    return gcp.compute.GlobalForwardingRule(
        resource_name=name,
        name=name,
        target=target,
        ip_protocol="TCP",
        port_range=port_range(protocol),
        load_balancing_scheme=LOAD_BALANCING_SCHEME,
        ip_address=address.id if address else None,
        opts=opts,
    )


class HttpsFrontend(pulumi.ComponentResource):
    """
    Managed certificate + target HTTPS proxy + 443 forwarding rule.

    Resources: ManagedSslCertificate, TargetHttpsProxy, GlobalForwardingRule,
    optionally GlobalAddress and, for the redirect, URLMap, TargetHttpProxy
    and a second GlobalForwardingRule.
    """

    def __init__(
        self,
        name: str,
        url_map: UrlMapRef,
        domains: list[str],
        reserve_ip: bool = True,
        http_redirect: bool = True,
        opts: pulumi.ResourceOptions | None = None,
    ):
        """
        Create the HTTPS frontend.

        Args:
            name: Pulumi resource name; base of the GCP resource names.
            url_map: URL map id the proxy dispatches to.
            domains: Host names on the managed certificate (1 to 100).
            reserve_ip: Reserve a global static IP for the forwarding rule(s).
            http_redirect: Also listen on port 80 and redirect to HTTPS. Needs
                reserve_ip so both rules share one address.

        Outputs (set on self, registered for the component):
            ip_address: Public IP; point the domains' A records here.
            urls: ``https://<domain>/`` for each domain.
        """
        if not domains:
            raise ValueError("HttpsFrontend requires at least one domain")
        if len(domains) > MAX_CERTIFICATE_DOMAINS:
            raise ValueError(
                f"a managed certificate takes at most {MAX_CERTIFICATE_DOMAINS} "
                f"domains, got {len(domains)}"
            )
        if http_redirect and not reserve_ip:
            raise ValueError("http_redirect requires reserve_ip")

        super().__init__(HTTPS_ID, name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        address = _reserve_address(name, child_opts) if reserve_ip else None

        # Provisioning stays PENDING until DNS for every domain hits the IP.
        self.certificate = gcp.compute.ManagedSslCertificate(
            resource_name=f"{name}-cert",
            name=f"{name}-cert",
            managed=gcp.compute.ManagedSslCertificateManagedArgs(
                domains=list(domains),
            ),
            opts=child_opts,
        )

        self.proxy = gcp.compute.TargetHttpsProxy(
            resource_name=f"{name}-https-proxy",
            name=f"{name}-https-proxy",
            url_map=url_map,
            ssl_certificates=[self.certificate.id],
            opts=child_opts,
        )

        self.forwarding_rule = _forwarding_rule(
            f"{name}-https-rule", HTTPS, self.proxy.id, address, child_opts
        )

        self.redirect_rule = None
        if http_redirect:
            redirect_map = gcp.compute.URLMap(
                resource_name=f"{name}-redirect",
                name=f"{name}-redirect",
                default_url_redirect=gcp.compute.URLMapDefaultUrlRedirectArgs(
                    https_redirect=True,
                    strip_query=False,
                    redirect_response_code="MOVED_PERMANENTLY_DEFAULT",
                ),
                opts=child_opts,
            )
            redirect_proxy = gcp.compute.TargetHttpProxy(
                resource_name=f"{name}-http-proxy",
                name=f"{name}-http-proxy",
                url_map=redirect_map.id,
                opts=child_opts,
            )
            self.redirect_rule = _forwarding_rule(
                f"{name}-http-rule", HTTP, redirect_proxy.id, address, child_opts
            )

        self.ip_address: pulumi.Output[str] = (
            address.address if address else self.forwarding_rule.ip_address
        )
        self.urls: pulumi.Output[list[str]] = pulumi.Output.from_input(
            [site_url(HTTPS, domain) for domain in domains]
        )
        self.register_outputs(
            {
                "ip_address": self.ip_address,
                "urls": self.urls,
            }
        )


class HttpFrontend(pulumi.ComponentResource):
    """
    Target HTTP proxy + port-80 forwarding rule (plain HTTP, no certificate).

    Resources: TargetHttpProxy, GlobalForwardingRule, optionally GlobalAddress.
    """

    def __init__(
        self,
        name: str,
        url_map: UrlMapRef,
        reserve_ip: bool = True,
        opts: pulumi.ResourceOptions | None = None,
    ):
        """
        Create the HTTP frontend.

        Args:
            name: Pulumi resource name; base of the GCP resource names.
            url_map: URL map id the proxy dispatches to.
            reserve_ip: Reserve a global static IP for the forwarding rule.

        Outputs (set on self, registered for the component):
            ip_address: Public IP of the forwarding rule.
            urls: ``http://<ip_address>/``.
        """
        super().__init__(HTTP_ID, name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        address = _reserve_address(name, child_opts) if reserve_ip else None

        self.proxy = gcp.compute.TargetHttpProxy(
            resource_name=f"{name}-http-proxy",
            name=f"{name}-http-proxy",
            url_map=url_map,
            opts=child_opts,
        )

        self.forwarding_rule = _forwarding_rule(
            f"{name}-http-rule", HTTP, self.proxy.id, address, child_opts
        )

        self.ip_address: pulumi.Output[str] = (
            address.address if address else self.forwarding_rule.ip_address
        )
        self.urls: pulumi.Output[list[str]] = self.ip_address.apply(
            lambda ip: [site_url(HTTP, ip)]
        )
        self.register_outputs(
            {
                "ip_address": self.ip_address,
                "urls": self.urls,
            }
        )
