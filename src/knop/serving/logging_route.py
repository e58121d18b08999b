# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/knop/serving/logging_route.py

from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..config.models import ExternalRoute, InstallationSpec
from .configure import OBSERVABILITY_CM, REVISION_URL_TEMPLATE_KEY, configure_if_unset

log = logging.getLogger("knop")

LOGGING_ROUTE_NAME = "kibana"
LOGGING_ROUTE_NAMESPACE = "openshift-logging"
LOGGING_URL_TEMPLATE = (
    "https://{host}/app/kibana#/discover?_a=(index:.all,query:"
    "'kubernetes.labels.serving_knative_dev%2FrevisionUID:${{REVISION_UID}}')"
)


def find_logging_host(routes: Iterable[ExternalRoute]) -> Optional[str]:
    for route in routes:
        if route.name == LOGGING_ROUTE_NAME and route.namespace == LOGGING_ROUTE_NAMESPACE:
            return next((h for h in route.hosts if h), None)
    return None


def apply_logging_route(spec: InstallationSpec, routes: Iterable[ExternalRoute]) -> Optional[str]:
    """Template the logging route host into the revision URL; a missing route is fine."""
    host = find_logging_host(routes)
    if host is None:
        log.debug("No %s/%s route found, skipping revision URL template",
                  LOGGING_ROUTE_NAMESPACE, LOGGING_ROUTE_NAME)
        return None
    configure_if_unset(spec, OBSERVABILITY_CM, REVISION_URL_TEMPLATE_KEY,
                       LOGGING_URL_TEMPLATE.format(host=host))
    return host
