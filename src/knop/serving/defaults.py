# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/knop/serving/defaults.py

from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Optional

from ..config.models import (
    HighAvailability,
    InstallationSpec,
    ResourceRequirementsOverride,
)
from .configure import (
    AUTOCREATE_DOMAIN_CLAIMS_KEY,
    DEFAULT_EXTERNAL_SCHEME_KEY,
    DEPLOYMENT_CM,
    DOMAIN_CM,
    DOMAIN_TEMPLATE_KEY,
    NETWORK_CM,
    QUEUE_SIDECAR_IMAGE_KEY,
    configure,
    configure_if_unset,
)

log = logging.getLogger("knop")

DEFAULT_HA_REPLICAS = 2
DEFAULT_CERTS_TYPE = "ConfigMap"
DEFAULT_CERTS_NAME = "config-service-ca"
DEFAULT_DOMAIN_TEMPLATE = "{{.Name}}-{{.Namespace}}.{{.Domain}}"

DEFAULT_IMAGE_KEY = "default"
QUEUE_PROXY_IMAGE_KEY = "queue-proxy"

DEFAULT_RESOURCES: List[ResourceRequirementsOverride] = [
    ResourceRequirementsOverride(container="webhook", limits={"memory": "1024Mi"}),
]


def default_high_availability(spec: InstallationSpec) -> None:
    if spec.high_availability is None:
        spec.high_availability = HighAvailability()
    if spec.high_availability.replicas == 0:
        spec.high_availability.replicas = DEFAULT_HA_REPLICAS


def default_certificates(spec: InstallationSpec) -> None:
    certs = spec.controller_custom_certs
    if certs.type == "":
        certs.type = DEFAULT_CERTS_TYPE
        certs.name = DEFAULT_CERTS_NAME


def apply_image_overrides(spec: InstallationSpec, images: Mapping[str, str]) -> None:
    """
    Copy operator-supplied images into the registry override map.

    Images come from the operator's own environment, so they win over
    user-supplied overrides of the same key. Keys that no deployment
    references are kept; they are simply never looked up.
    """
    registry = spec.registry
    for component, image in images.items():
        registry.override[component] = image
    if DEFAULT_IMAGE_KEY in registry.override:
        registry.default = registry.override[DEFAULT_IMAGE_KEY]
    if QUEUE_PROXY_IMAGE_KEY in registry.override:
        configure(spec, DEPLOYMENT_CM, QUEUE_SIDECAR_IMAGE_KEY, registry.override[QUEUE_PROXY_IMAGE_KEY])


def merge_resources(spec: InstallationSpec) -> None:
    """Defaults first, then user overrides keyed by container (last writer wins)."""
    merged: Dict[str, ResourceRequirementsOverride] = {}
    for r in DEFAULT_RESOURCES:
        merged[r.container] = r.model_copy(deep=True)
    seen = set()
    for r in spec.resources:
        if r.container in seen:
            log.debug("Duplicate resource override for container %s, keeping the last one", r.container)
        seen.add(r.container)
        merged[r.container] = r
    spec.resources = list(merged.values())


def default_network(spec: InstallationSpec) -> None:
    configure_if_unset(spec, NETWORK_CM, DOMAIN_TEMPLATE_KEY, DEFAULT_DOMAIN_TEMPLATE)
    configure_if_unset(spec, NETWORK_CM, AUTOCREATE_DOMAIN_CLAIMS_KEY, "true")
    configure_if_unset(spec, NETWORK_CM, DEFAULT_EXTERNAL_SCHEME_KEY, "https")


def default_domain(spec: InstallationSpec, cluster_domain: Optional[str]) -> None:
    if not cluster_domain:
        log.debug("Cluster ingress domain unknown, leaving domain config alone")
        return
    configure_if_unset(spec, DOMAIN_CM, cluster_domain, "")


def apply_defaults(
    spec: InstallationSpec,
    *,
    images: Mapping[str, str],
    cluster_domain: Optional[str] = None,
) -> InstallationSpec:
    """Run every defaulting rule on spec in place and return it."""
    default_high_availability(spec)
    default_certificates(spec)
    apply_image_overrides(spec, images)
    merge_resources(spec)
    default_network(spec)
    default_domain(spec, cluster_domain)
    return spec
