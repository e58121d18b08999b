# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/knop/serving/version.py

from __future__ import annotations

import re
from dataclasses import dataclass

from ..errors import VersionTooLow, VersionUnparsable

_TRIPLE = re.compile(r"([0-9]+)\.([0-9]+)\.([0-9]+)")
_SUFFIX = re.compile(r"[-+]")


@dataclass(frozen=True, order=True)
class VersionInfo:
    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def parse_version(raw: str) -> VersionInfo:
    """
    Parse a platform version string into its numeric triple.

    Accepted:
      v1.20.0
      1.20.2-kpn-065dce
      1.20.0-1095+9689d22dc3121e-dirty
      v1.20.0+k3s.1

    Pre-release and build suffixes are dropped and never affect ordering.
    """
    if raw is None:
        raise VersionUnparsable("version is not set")
    s = raw.strip()
    if s.startswith("v"):
        s = s[1:]
    s = _SUFFIX.split(s, maxsplit=1)[0]
    m = _TRIPLE.fullmatch(s)
    if not m:
        raise VersionUnparsable(f"failed to parse version {raw!r}")
    return VersionInfo(*(int(g) for g in m.groups()))


def check_minimum_version(actual: str, minimum: str) -> None:
    """Raise VersionTooLow if actual < minimum, VersionUnparsable if either is garbage."""
    current = parse_version(actual)
    required = parse_version(minimum)
    if current < required:
        raise VersionTooLow(
            f"Version constraint unfulfilled: minimum version {required}, actual version {current}"
        )
