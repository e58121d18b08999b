# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/knop/serving/extension.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from ..config.models import ClusterFacts, ServingResource
from ..config.settings import OperatorSettings
from ..errors import VersionTooLow, VersionUnparsable
from ..observers.dispatcher import EventBus
from ..observers.events import ConditionFailed, ReconcileCompleted, new_ctx
from .defaults import apply_defaults
from .ingress import IngressBackend, resolve_ingress
from .logging_route import apply_logging_route
from .monitoring import MonitoringDecision, apply_monitoring
from .namespace import check_namespace
from .version import check_minimum_version

log = logging.getLogger("knop")

_VERSION_REASONS = ("VersionTooLow", "VersionUnparsable")


@dataclass(frozen=True)
class ReconcileResult:
    resource: ServingResource
    backend: IngressBackend
    monitoring: MonitoringDecision

    @property
    def namespace_labels(self) -> Dict[str, str]:
        """Labels the caller must write onto the resource's namespace."""
        return self.monitoring.namespace_labels()

    @property
    def failed(self) -> bool:
        return self.resource.status.failed


def _check_version(ks: ServingResource, facts: ClusterFacts, minimum: str) -> None:
    if facts.kubernetes_version is None:
        log.warning("Kubernetes version not supplied, skipping minimum version check")
        return
    try:
        check_minimum_version(facts.kubernetes_version, minimum)
    except VersionTooLow as e:
        ks.status.mark_dependency_missing("VersionTooLow", str(e))
        return
    except VersionUnparsable as e:
        ks.status.mark_dependency_missing("VersionUnparsable", str(e))
        return

    prev = ks.status.get_condition("DependenciesInstalled")
    if prev is not None and prev.reason in _VERSION_REASONS:
        ks.status.mark_dependencies_installed()


def reconcile(
    resource: ServingResource,
    facts: ClusterFacts,
    settings: OperatorSettings,
    bus: Optional[EventBus] = None,
    run_id: Optional[str] = None,
) -> ReconcileResult:
    """
    One reconciliation pass over a copy of *resource*.

    Version and namespace failures end up as status conditions; defaulting
    still runs so the returned resource is coherent even when failed.
    """
    ks = resource.model_copy(deep=True)
    ctx = new_ctx(namespace=ks.namespace, run_id=run_id)
    before = {c.type: c for c in ks.status.conditions}

    _check_version(ks, facts, settings.min_kubernetes_version)
    check_namespace(ks, settings.required_namespace)

    apply_defaults(ks.spec, images=settings.images, cluster_domain=facts.cluster_domain)
    backend = resolve_ingress(ks.spec)
    apply_logging_route(ks.spec, facts.routes)
    decision = apply_monitoring(ks.spec, settings.monitoring_toggle)

    if bus:
        for cond in ks.status.conditions:
            if cond.status == "False" and before.get(cond.type) != cond:
                bus.emit(ConditionFailed(condition=cond.type, reason=cond.reason,
                                         message=cond.message, **ctx))
        bus.emit(ReconcileCompleted(backend=backend.value, monitoring_enabled=decision.enabled,
                                    failed=ks.status.failed, **ctx))

    return ReconcileResult(resource=ks, backend=backend, monitoring=decision)
