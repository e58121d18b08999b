# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/knop/errors.py
class KnopError(RuntimeError):
    """Base class for operator core failures."""


class VersionError(KnopError):
    """Raised when the platform version gate does not pass."""

class VersionUnparsable(VersionError):
    """Raised when a version string is not major.minor.patch."""

class VersionTooLow(VersionError):
    """Raised when the platform is older than the required minimum."""


class RouteError(KnopError):
    """Raised when routes cannot be derived from an ingress."""

class NoValidLoadBalancerDomain(RouteError):
    """Raised when no load balancer entry carries a usable internal domain."""

    def __init__(self, message: str = "unable to find Ingress LoadBalancer with DomainInternal set"):
        super().__init__(message)

class IncorrectHTTPOptionAnnotation(RouteError):
    """Raised when the legacy httpOption annotation has an unknown value."""

    def __init__(self, value: str):
        super().__init__(f"incorrect HTTPOption annotation: {value}")
        self.value = value


class SettingsError(KnopError):
    """Raised when operator environment settings are invalid."""

class ConfigLoadError(KnopError):
    """Raised when a resource, facts or ingress file cannot be loaded."""
