# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/knop/config/models.py

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

# section -> key -> value, insertion ordered
ConfigMapData = Dict[str, Dict[str, str]]


class _Model(BaseModel):
    # resource quantities and config values may be written as bare YAML numbers
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)


class HighAvailability(_Model):
    replicas: int = 0


class CustomCerts(_Model):
    type: str = ""
    name: str = ""


class Registry(_Model):
    default: str = ""
    override: Dict[str, str] = Field(default_factory=dict)


class ResourceRequirementsOverride(_Model):
    container: str
    limits: Dict[str, str] = Field(default_factory=dict)
    requests: Dict[str, str] = Field(default_factory=dict)


class IngressBackendConfig(_Model):
    enabled: bool = False
    service_type: Optional[str] = Field(default=None, alias="service-type")


class IngressConfigs(_Model):
    # declaration order matters for backend selection
    istio: IngressBackendConfig = Field(default_factory=IngressBackendConfig)
    kourier: IngressBackendConfig = Field(default_factory=IngressBackendConfig)
    contour: IngressBackendConfig = Field(default_factory=IngressBackendConfig)


class InstallationSpec(_Model):
    high_availability: Optional[HighAvailability] = Field(default=None, alias="high-availability")
    controller_custom_certs: CustomCerts = Field(
        default_factory=CustomCerts, alias="controller-custom-certs"
    )
    registry: Registry = Field(default_factory=Registry)
    resources: List[ResourceRequirementsOverride] = Field(default_factory=list)
    config: ConfigMapData = Field(default_factory=dict)
    ingress: Optional[IngressConfigs] = None


class Condition(_Model):
    type: str
    status: str
    reason: str = ""
    message: str = ""


class InstallationStatus(_Model):
    conditions: List[Condition] = Field(default_factory=list)

    def set_condition(self, cond: Condition) -> None:
        """Replace the condition of the same type, or append it."""
        for i, existing in enumerate(self.conditions):
            if existing.type == cond.type:
                self.conditions[i] = cond
                return
        self.conditions.append(cond)

    def get_condition(self, type_: str) -> Optional[Condition]:
        return next((c for c in self.conditions if c.type == type_), None)

    def mark_install_failed(self, message: str) -> None:
        self.set_condition(
            Condition(type="InstallSucceeded", status="False", reason="InstallFailed", message=message)
        )

    def mark_dependency_missing(self, reason: str, message: str) -> None:
        self.set_condition(
            Condition(type="DependenciesInstalled", status="False", reason=reason, message=message)
        )

    def mark_dependencies_installed(self) -> None:
        self.set_condition(Condition(type="DependenciesInstalled", status="True"))

    @property
    def failed(self) -> bool:
        return any(c.status == "False" for c in self.conditions)


class ServingResource(_Model):
    """The serving installation custom resource as seen by the core."""

    name: str = "knative-serving"
    namespace: str = ""
    spec: InstallationSpec = Field(default_factory=InstallationSpec)
    status: InstallationStatus = Field(default_factory=InstallationStatus)


class ExternalRoute(_Model):
    """An already-fetched route object owned by some other subsystem."""

    name: str
    namespace: str
    hosts: List[str] = Field(default_factory=list)


class ClusterFacts(_Model):
    """External observations supplied to one reconciliation pass."""

    kubernetes_version: Optional[str] = None
    cluster_domain: Optional[str] = None
    routes: List[ExternalRoute] = Field(default_factory=list)
