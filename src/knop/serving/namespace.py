# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/knop/serving/namespace.py

import logging

from ..config.models import ServingResource

log = logging.getLogger("knop")


def check_namespace(resource: ServingResource, required: str) -> bool:
    """
    Record a terminal InstallFailed condition when the resource lives outside
    the required namespace. Never raises.
    """
    if resource.namespace == required:
        return True
    msg = f'Knative Serving must be installed into the namespace "{required}"'
    log.warning("%s/%s: %s", resource.namespace, resource.name, msg)
    resource.status.mark_install_failed(msg)
    return False
