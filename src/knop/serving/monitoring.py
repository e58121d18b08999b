# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/knop/serving/monitoring.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from ..config.models import ConfigMapData, InstallationSpec
from .configure import OBSERVABILITY_BACKEND_KEY, OBSERVABILITY_CM, configure
from .ingress import MONITORING_BACKEND_NONE

log = logging.getLogger("knop")

ENABLE_MONITORING_LABEL = "openshift.io/cluster-monitoring"


@dataclass(frozen=True)
class MonitoringDecision:
    enabled: bool
    backend_to_write: Optional[str] = None  # None = leave config alone

    @property
    def label(self) -> str:
        return "true" if self.enabled else "false"

    def namespace_labels(self) -> Dict[str, str]:
        return {ENABLE_MONITORING_LABEL: self.label}


def monitoring_decision(config: ConfigMapData, toggle: Optional[bool]) -> MonitoringDecision:
    """
    Explicit backend config beats the environment toggle, which beats the
    enabled-by-default fallback.
    """
    backend = config.get(OBSERVABILITY_CM, {}).get(OBSERVABILITY_BACKEND_KEY)
    if backend is not None:
        return MonitoringDecision(enabled=backend != MONITORING_BACKEND_NONE)
    if toggle is not None:
        return MonitoringDecision(
            enabled=toggle,
            backend_to_write=None if toggle else MONITORING_BACKEND_NONE,
        )
    return MonitoringDecision(enabled=True)


def apply_monitoring(spec: InstallationSpec, toggle: Optional[bool]) -> MonitoringDecision:
    """Write the backend the decision asks for; the namespace label is left to the caller."""
    decision = monitoring_decision(spec.config, toggle)
    if decision.backend_to_write is not None:
        configure(spec, OBSERVABILITY_CM, OBSERVABILITY_BACKEND_KEY, decision.backend_to_write)
    log.debug("Monitoring enabled=%s (toggle=%s)", decision.enabled, toggle)
    return decision
