# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/knop/config/settings.py

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional
import os

from ..errors import SettingsError

IMAGE_ENV_PREFIX = "IMAGE_"

# accepted spellings are case-sensitive: "True" parses, "tRUE" does not
_TRUE = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE = {"0", "f", "F", "FALSE", "false", "False"}


@dataclass(frozen=True)
class OperatorSettings:
    required_namespace: str
    min_kubernetes_version: str
    monitoring_toggle: Optional[bool]  # None = unset
    images: Dict[str, str] = field(default_factory=dict)


def parse_toggle(value: Optional[str]) -> Optional[bool]:
    """Tri-state boolean: unset/empty -> None."""
    if value is None or not value.strip():
        return None
    v = value.strip()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise SettingsError(f"invalid boolean value {value!r} for monitoring toggle")


def image_overrides(environ: Mapping[str, str]) -> Dict[str, str]:
    """
    Collect IMAGE_<component>=<image> variables.

    IMAGE_queue-proxy=quay.io/x/queue -> {"queue-proxy": "quay.io/x/queue"}
    """
    images = {}
    for key in sorted(environ):
        if key.startswith(IMAGE_ENV_PREFIX) and len(key) > len(IMAGE_ENV_PREFIX):
            images[key[len(IMAGE_ENV_PREFIX):]] = environ[key]
    return images


def load_operator_settings(environ: Optional[Mapping[str, str]] = None) -> OperatorSettings:
    # sensible defaults for dev; override via env
    env = os.environ if environ is None else environ
    return OperatorSettings(
        required_namespace=env.get("REQUIRED_SERVING_NAMESPACE", "knative-serving"),
        min_kubernetes_version=env.get("KNOP_MIN_KUBERNETES_VERSION", "1.20.0"),
        monitoring_toggle=parse_toggle(env.get("ENABLE_SERVING_MONITORING")),
        images=image_overrides(env),
    )
