# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/knop/ingress/models.py

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List

VISIBILITY_CLUSTER_LOCAL = "ClusterLocal"
VISIBILITY_EXTERNAL_IP = "ExternalIP"

HTTP_OPTION_ENABLED = "Enabled"
HTTP_OPTION_REDIRECTED = "Redirected"


# -----------------------------
# Knative Ingress (input)
# -----------------------------

@dataclass
class IngressRule:
    hosts: List[str]
    visibility: str = VISIBILITY_EXTERNAL_IP
    http_option: str = HTTP_OPTION_ENABLED


@dataclass
class IngressTLS:
    hosts: List[str] = field(default_factory=list)
    secret_name: str = ""
    secret_namespace: str = ""


@dataclass
class LoadBalancerIngress:
    domain_internal: str = ""


@dataclass
class LoadBalancerStatus:
    ingress: List[LoadBalancerIngress] = field(default_factory=list)


@dataclass
class IngressDescriptor:
    name: str
    namespace: str
    uid: str
    rules: List[IngressRule] = field(default_factory=list)
    tls: List[IngressTLS] = field(default_factory=list)
    labels: Dict[str, str] = field(default_factory=dict)
    annotations: Dict[str, str] = field(default_factory=dict)
    public_load_balancer: LoadBalancerStatus = field(default_factory=LoadBalancerStatus)

    @classmethod
    def from_manifest(cls, manifest: Dict[str, Any]) -> "IngressDescriptor":
        """
        Build a descriptor from a networking.internal.knative.dev Ingress.

        Rules without their own httpOption inherit spec.httpOption.
        """
        meta = manifest.get("metadata") or {}
        spec = manifest.get("spec") or {}
        status = manifest.get("status") or {}

        default_option = spec.get("httpOption") or HTTP_OPTION_ENABLED
        rules = [
            IngressRule(
                hosts=list(r.get("hosts") or []),
                visibility=r.get("visibility") or VISIBILITY_EXTERNAL_IP,
                http_option=r.get("httpOption") or default_option,
            )
            for r in spec.get("rules") or []
        ]
        tls = [
            IngressTLS(
                hosts=list(t.get("hosts") or []),
                secret_name=t.get("secretName", ""),
                secret_namespace=t.get("secretNamespace", ""),
            )
            for t in spec.get("tls") or []
        ]
        lb = (status.get("publicLoadBalancer") or {}).get("ingress") or []
        return cls(
            name=meta["name"],
            namespace=meta.get("namespace", ""),
            uid=str(meta.get("uid", "")),
            rules=rules,
            tls=tls,
            labels=dict(meta.get("labels") or {}),
            annotations=dict(meta.get("annotations") or {}),
            public_load_balancer=LoadBalancerStatus(
                ingress=[LoadBalancerIngress(domain_internal=i.get("domainInternal", "")) for i in lb]
            ),
        )


# -----------------------------
# OpenShift Route (output)
# -----------------------------

TLS_TERMINATION_EDGE = "edge"
TLS_TERMINATION_PASSTHROUGH = "passthrough"

INSECURE_POLICY_ALLOW = "Allow"
INSECURE_POLICY_REDIRECT = "Redirect"

WILDCARD_POLICY_NONE = "None"


@dataclass
class RouteDescriptor:
    name: str
    namespace: str
    host: str
    service_name: str
    target_port: str
    termination: str = TLS_TERMINATION_EDGE
    insecure_edge_termination_policy: str = INSECURE_POLICY_ALLOW
    labels: Dict[str, str] = field(default_factory=dict)
    annotations: Dict[str, str] = field(default_factory=dict)
    weight: int = 100
    wildcard_policy: str = WILDCARD_POLICY_NONE

    def to_manifest(self) -> Dict[str, Any]:
        return {
            "apiVersion": "route.openshift.io/v1",
            "kind": "Route",
            "metadata": {
                "name": self.name,
                "namespace": self.namespace,
                "labels": dict(self.labels),
                "annotations": dict(self.annotations),
            },
            "spec": {
                "host": self.host,
                "port": {"targetPort": self.target_port},
                "to": {"kind": "Service", "name": self.service_name, "weight": self.weight},
                "tls": {
                    "termination": self.termination,
                    "insecureEdgeTerminationPolicy": self.insecure_edge_termination_policy,
                },
                "wildcardPolicy": self.wildcard_policy,
            },
        }
