# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/knop/serving/configure.py

from __future__ import annotations

from typing import Optional

from ..config.models import InstallationSpec

NETWORK_CM = "network"
OBSERVABILITY_CM = "observability"
DEPLOYMENT_CM = "deployment"
DOMAIN_CM = "domain"

INGRESS_CLASS_KEY = "ingress.class"
DOMAIN_TEMPLATE_KEY = "domainTemplate"
DEFAULT_EXTERNAL_SCHEME_KEY = "defaultExternalScheme"
AUTOCREATE_DOMAIN_CLAIMS_KEY = "autocreateClusterDomainClaims"
QUEUE_SIDECAR_IMAGE_KEY = "queueSidecarImage"
OBSERVABILITY_BACKEND_KEY = "metrics.backend-destination"
REVISION_URL_TEMPLATE_KEY = "logging.revision-url-template"


def configure(spec: InstallationSpec, section: str, key: str, value: str) -> None:
    """Set section/key unconditionally."""
    spec.config.setdefault(section, {})[key] = value


def configure_if_unset(spec: InstallationSpec, section: str, key: str, value: str) -> bool:
    """Set section/key only when the key is absent. Returns True if written."""
    data = spec.config.setdefault(section, {})
    if key in data:
        return False
    data[key] = value
    return True


def config_value(spec: InstallationSpec, section: str, key: str) -> Optional[str]:
    return spec.config.get(section, {}).get(key)
