# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/knop/utils/serialize.py

from dataclasses import is_dataclass, asdict
from enum import Enum
from typing import Any
from pydantic import BaseModel

from ..ingress.models import RouteDescriptor


def to_jsonable(obj: Any) -> Any:
    if isinstance(obj, RouteDescriptor):
        return obj.to_manifest()

    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json", by_alias=True, exclude_none=True)

    if is_dataclass(obj):
        return to_jsonable(asdict(obj))

    if isinstance(obj, dict):
        return {k: to_jsonable(v) for k, v in obj.items()}

    if isinstance(obj, (list, tuple)):
        return [to_jsonable(v) for v in obj]

    if isinstance(obj, Enum):
        return obj.value

    return obj
