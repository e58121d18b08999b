# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/knop/serving/ingress.py

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional

from ..config.models import IngressBackendConfig, IngressConfigs, InstallationSpec
from .configure import (
    INGRESS_CLASS_KEY,
    NETWORK_CM,
    OBSERVABILITY_BACKEND_KEY,
    OBSERVABILITY_CM,
    configure,
    configure_if_unset,
)

log = logging.getLogger("knop")

SERVICE_TYPE_CLUSTER_IP = "ClusterIP"
MONITORING_BACKEND_NONE = "none"


class IngressBackend(str, Enum):
    """Ingress backends in declaration order."""

    ISTIO = "istio"
    KOURIER = "kourier"
    CONTOUR = "contour"

    @property
    def class_name(self) -> str:
        return f"{self.value}.ingress.networking.knative.dev"

    @property
    def mesh(self) -> bool:
        return self is IngressBackend.ISTIO

    def config(self, ingress: IngressConfigs) -> IngressBackendConfig:
        return getattr(ingress, self.value)


REFERENCE_BACKEND = IngressBackend.KOURIER


def enabled_backends(ingress: Optional[IngressConfigs]) -> List[IngressBackend]:
    if ingress is None:
        return []
    return [b for b in IngressBackend if b.config(ingress).enabled]


def select_backend(ingress: Optional[IngressConfigs]) -> Optional[IngressBackend]:
    """
    The single precedence rule for backend choice.

    Last enabled backend in declaration order wins; None when nothing is
    enabled.
    """
    enabled = enabled_backends(ingress)
    if len(enabled) > 1:
        log.warning(
            "Multiple ingress backends enabled (%s), using %s",
            ", ".join(b.value for b in enabled),
            enabled[-1].value,
        )
    return enabled[-1] if enabled else None


def resolve_ingress(spec: InstallationSpec) -> IngressBackend:
    """Pick the active ingress backend and apply its configuration side effects."""
    if spec.ingress is None:
        spec.ingress = IngressConfigs()

    backend = select_backend(spec.ingress)
    if backend is None:
        log.info("No ingress backend enabled, falling back to %s", REFERENCE_BACKEND.value)
        backend = REFERENCE_BACKEND
        backend.config(spec.ingress).enabled = True

    cfg = backend.config(spec.ingress)
    if not cfg.service_type:
        cfg.service_type = SERVICE_TYPE_CLUSTER_IP

    if backend.mesh:
        # the mesh ships its own telemetry path
        configure(spec, NETWORK_CM, INGRESS_CLASS_KEY, backend.class_name)
        configure(spec, OBSERVABILITY_CM, OBSERVABILITY_BACKEND_KEY, MONITORING_BACKEND_NONE)
    else:
        configure_if_unset(spec, NETWORK_CM, INGRESS_CLASS_KEY, backend.class_name)

    log.debug("Resolved ingress backend %s (service type %s)", backend.value, cfg.service_type)
    return backend
