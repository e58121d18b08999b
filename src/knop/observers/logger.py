# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/knop/observers/logger.py

from __future__ import annotations
import logging

from .events import BaseEvent, ConditionFailed, ReconcileCompleted, RoutesComputed, RoutesFailed


def _describe(event: BaseEvent) -> str:
    if isinstance(event, ConditionFailed):
        return f"{event.condition} ({event.reason}): {event.message}"
    if isinstance(event, ReconcileCompleted):
        state = "failed" if event.failed else "ok"
        monitoring = "on" if event.monitoring_enabled else "off"
        return f"{event.namespace} {state}, backend={event.backend}, monitoring={monitoring}"
    if isinstance(event, RoutesComputed):
        return f"{event.ingress} -> {event.count} route(s)"
    if isinstance(event, RoutesFailed):
        return f"{event.ingress}: {event.error}"
    return ", ".join(f"{k}={v}" for k, v in event.dict().items() if k != "ts")


class LoggerObserver:
    """Writes reconcile and route events to a logger, one line per event."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def notify(self, event: BaseEvent) -> None:
        failed = isinstance(event, (ConditionFailed, RoutesFailed)) or (
            isinstance(event, ReconcileCompleted) and event.failed
        )
        level = logging.WARNING if failed else logging.INFO
        self.logger.log(level, "[%s] %s: %s", event.run_id[:8], type(event).__name__, _describe(event))
