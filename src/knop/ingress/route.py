# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/knop/ingress/route.py

from __future__ import annotations

import hashlib
import logging
from typing import List, Optional, Tuple

from ..errors import IncorrectHTTPOptionAnnotation, NoValidLoadBalancerDomain
from ..observers.dispatcher import EventBus
from ..observers.events import RoutesComputed, RoutesFailed, new_ctx
from .models import (
    HTTP_OPTION_REDIRECTED,
    INSECURE_POLICY_ALLOW,
    INSECURE_POLICY_REDIRECT,
    TLS_TERMINATION_EDGE,
    TLS_TERMINATION_PASSTHROUGH,
    VISIBILITY_CLUSTER_LOCAL,
    IngressDescriptor,
    IngressRule,
    RouteDescriptor,
)

log = logging.getLogger("knop")

TIMEOUT_ANNOTATION = "haproxy.router.openshift.io/timeout"
DISABLE_ROUTE_ANNOTATION = "serving.knative.openshift.io/disableRoute"
ENABLE_PASSTHROUGH_ANNOTATION = "serving.knative.openshift.io/enablePassthrough"
HTTP_OPTION_ANNOTATION = "networking.knative.dev/httpOption"

INGRESS_LABEL_KEY = "networking.internal.knative.dev/ingress"
OPENSHIFT_INGRESS_LABEL_KEY = "serving.knative.openshift.io/ingressName"
OPENSHIFT_INGRESS_NAMESPACE_LABEL_KEY = "serving.knative.openshift.io/ingressNamespace"

HTTP_PORT = "http2"
HTTPS_PORT = "https"

# same as the maximum revision timeout
DEFAULT_MAX_REVISION_TIMEOUT_SECONDS = 600
DEFAULT_TIMEOUT = f"{DEFAULT_MAX_REVISION_TIMEOUT_SECONDS}s"


def is_routable_host(host: str) -> bool:
    """
    foo.example.com            -> True
    foo.default.example.com    -> True
    svc.ns.svc.cluster.local   -> False (cluster internal)
    """
    parts = host.split(".")
    return len(parts) == 2 or (len(parts) > 2 and parts[2] != "svc")


def route_name(uid: str, host: str) -> str:
    return f"route-{uid}-{hash_host(host)}"


def hash_host(host: str) -> str:
    return hashlib.sha256(host.encode("utf-8")).hexdigest()[:6]


def load_balancer_target(ingress: IngressDescriptor) -> Tuple[str, str]:
    """
    First public load balancer entry whose internal domain looks like
    service.namespace.svc[...]; returns (service, namespace).
    """
    for lb in ingress.public_load_balancer.ingress:
        parts = (lb.domain_internal or "").split(".")
        if len(parts) > 2 and parts[2] == "svc":
            return parts[0], parts[1]
    raise NoValidLoadBalancerDomain()


def _insecure_policy(rule: IngressRule, annotations: dict) -> str:
    policy = INSECURE_POLICY_ALLOW
    if rule.http_option == HTTP_OPTION_REDIRECTED:
        policy = INSECURE_POLICY_REDIRECT

    # legacy per-ingress override
    annotation = annotations.get(HTTP_OPTION_ANNOTATION, "")
    if annotation:
        value = annotation.lower()
        if value == "enabled":
            policy = INSECURE_POLICY_ALLOW
        elif value == "redirected":
            policy = INSECURE_POLICY_REDIRECT
        else:
            raise IncorrectHTTPOptionAnnotation(annotation)
    return policy


def make_route(ingress: IngressDescriptor, host: str, rule: IngressRule) -> Optional[RouteDescriptor]:
    """Build the route for one host, or None when the host must not be exposed."""
    annotations = dict(ingress.annotations)

    if rule.visibility == VISIBILITY_CLUSTER_LOCAL:
        return None
    if DISABLE_ROUTE_ANNOTATION in annotations:
        log.debug("Route for %s disabled by annotation on %s/%s", host, ingress.namespace, ingress.name)
        return None

    annotations[TIMEOUT_ANNOTATION] = DEFAULT_TIMEOUT

    labels = {
        **ingress.labels,
        INGRESS_LABEL_KEY: ingress.name,
        OPENSHIFT_INGRESS_LABEL_KEY: ingress.name,
        OPENSHIFT_INGRESS_NAMESPACE_LABEL_KEY: ingress.namespace,
    }

    service_name, namespace = load_balancer_target(ingress)

    route = RouteDescriptor(
        name=route_name(ingress.uid, host),
        namespace=namespace,
        host=host,
        service_name=service_name,
        target_port=HTTP_PORT,
        termination=TLS_TERMINATION_EDGE,
        insecure_edge_termination_policy=_insecure_policy(rule, annotations),
        labels=labels,
        annotations=annotations,
    )

    # passthrough beats the http option
    if ENABLE_PASSTHROUGH_ANNOTATION in annotations or ingress.tls:
        route.target_port = HTTPS_PORT
        route.termination = TLS_TERMINATION_PASSTHROUGH
        route.insecure_edge_termination_policy = INSECURE_POLICY_REDIRECT

    return route


def make_routes(ingress: IngressDescriptor) -> List[RouteDescriptor]:
    """
    Translate an ingress into routes, one per externally routable host.

    Any error aborts the whole translation; no partial list is returned.
    """
    routes: List[RouteDescriptor] = []
    for rule in ingress.rules:
        if rule.visibility == VISIBILITY_CLUSTER_LOCAL:
            continue
        for host in rule.hosts:
            if not is_routable_host(host):
                log.debug("Skipping cluster-internal host %s", host)
                continue
            route = make_route(ingress, host, rule)
            if route is None:
                continue
            routes.append(route)
    return routes


def translate(
    ingress: IngressDescriptor,
    bus: Optional[EventBus] = None,
    run_id: Optional[str] = None,
) -> List[RouteDescriptor]:
    """make_routes plus RoutesComputed / RoutesFailed events."""
    ctx = new_ctx(namespace=ingress.namespace, run_id=run_id)
    ref = f"{ingress.namespace}/{ingress.name}"
    try:
        routes = make_routes(ingress)
    except Exception as e:
        if bus:
            bus.emit(RoutesFailed(ingress=ref, error=str(e), **ctx))
        raise
    if bus:
        bus.emit(RoutesComputed(ingress=ref, count=len(routes), **ctx))
    return routes
