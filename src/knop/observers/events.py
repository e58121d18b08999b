# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/knop/observers/events.py

from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Dict, Any, Optional
from datetime import datetime, timezone
import uuid


# ---------------------------------------------------------------------
# Base context and helper
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class BaseEvent:
    ts: str           # ISO timestamp
    run_id: str       # correlates all events of a single reconciliation pass
    namespace: str    # namespace of the resource being reconciled

    def dict(self) -> Dict[str, Any]:
        return asdict(self)


def new_ctx(namespace: str, run_id: Optional[str] = None) -> Dict[str, Any]:
    return {
        "ts": datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z"),
        "run_id": run_id or str(uuid.uuid4()),
        "namespace": namespace,
    }


# ---------------------------------------------------------------------
# Serving reconciliation
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class ConditionFailed(BaseEvent):
    condition: str
    reason: str
    message: str

@dataclass(frozen=True)
class ReconcileCompleted(BaseEvent):
    backend: str
    monitoring_enabled: bool
    failed: bool


# ---------------------------------------------------------------------
# Route translation
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class RoutesComputed(BaseEvent):
    ingress: str
    count: int

@dataclass(frozen=True)
class RoutesFailed(BaseEvent):
    ingress: str
    error: str
