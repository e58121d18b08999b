# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/knop/config/loader.py

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..errors import ConfigLoadError
from ..ingress.models import IngressDescriptor
from .models import ClusterFacts
from .models import ServingResource

log = logging.getLogger("knop")


def _load_yaml(path: Path) -> dict:
    """Load a YAML file, expanding ${ENV_VAR} references."""
    try:
        raw = path.read_text()
    except OSError as e:
        raise ConfigLoadError(f"cannot read {path}: {e}") from e
    expanded = os.path.expandvars(raw)
    try:
        data = yaml.safe_load(expanded) or {}
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigLoadError(f"{path} must contain a mapping at the top level")
    return data


def _flatten_manifest(data: dict) -> dict:
    """
    Accept either a full custom-resource manifest
    (apiVersion/kind/metadata/spec/status) or the flat
    name/namespace/spec/status shape.
    """
    if "metadata" not in data:
        return data
    meta = data.get("metadata") or {}
    flat = {k: v for k, v in data.items() if k in ("spec", "status")}
    if meta.get("name"):
        flat["name"] = meta["name"]
    flat["namespace"] = meta.get("namespace", "")
    return flat


def load_resource(path: str | Path) -> ServingResource:
    """Load and validate a serving installation resource."""
    path = Path(path)
    data = _flatten_manifest(_load_yaml(path))
    try:
        return ServingResource.model_validate(data)
    except ValidationError as e:
        raise ConfigLoadError(f"invalid serving resource {path}: {e}") from e


def load_facts(path: str | Path | None) -> ClusterFacts:
    """
    Load the cluster observations for a pass.

    No file means an empty fact set: unknown version, no cluster domain and
    no external routes.
    """
    if path is None:
        log.debug("No facts file given, using empty cluster facts")
        return ClusterFacts()
    path = Path(path)
    try:
        return ClusterFacts.model_validate(_load_yaml(path))
    except ValidationError as e:
        raise ConfigLoadError(f"invalid facts file {path}: {e}") from e


def load_ingress(path: str | Path) -> IngressDescriptor:
    """Load a Knative Ingress manifest into an IngressDescriptor."""
    path = Path(path)
    data = _load_yaml(path)
    try:
        return IngressDescriptor.from_manifest(data)
    except (KeyError, TypeError, ValueError) as e:
        raise ConfigLoadError(f"invalid ingress manifest {path}: {e}") from e
