from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any, Dict, List, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field, create_model

from sleuth.types import ContractConfigError

CONTRACT_CONFIG = ConfigDict(extra="forbid", validate_assignment=True, populate_by_name=True)

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


def coerce_string_list(value: object) -> List[str]:
    """Convert model-provided list content into a clean list of strings.

    A bare string becomes a one-item list; ``None`` items and blanks are dropped.
    Anything else is passed through for the field's own type check.
    """

    if value is None:
        return []
    if isinstance(value, str):
        candidate = value.strip()
        return [candidate] if candidate else []
    if isinstance(value, Iterable) and not isinstance(value, (bytes, dict)):
        cleaned: List[str] = []
        for item in value:
            if item is None:
                continue
            if not isinstance(item, str):
                cleaned.append(item)  # type: ignore[arg-type]
                continue
            candidate = item.strip()
            if candidate:
                cleaned.append(candidate)
        return cleaned
    return value  # type: ignore[return-value]


def localize(description: str, directive: str) -> str:
    """Append a localization directive to a field description."""

    text = description.strip()
    if not directive:
        return text
    sep = " " if text.endswith((".", ",", ":")) else ". "
    return f"{text}{sep}Must be written {directive}."


def localized_text(description: str, directive: str, *, max_length: int) -> Tuple[Type[str], Any]:
    """Field definition for a bounded string whose description embeds the directive."""

    return (str, Field(..., max_length=max_length, description=localize(description, directive)))


def compose_model(
    name: str,
    fields: Dict[str, Tuple[Any, Any]],
    *,
    doc: Optional[str] = None,
    base: Optional[Type[BaseModel]] = None,
) -> Type[BaseModel]:
    """Create a fresh contract model class.

    Every call returns a new class, so descriptions captured from the language
    profile are frozen into that class and never change afterwards.
    """

    kwargs: Dict[str, Any] = dict(fields)
    if base is None:
        kwargs["__config__"] = CONTRACT_CONFIG
    else:
        kwargs["__base__"] = base
    if doc:
        kwargs["__doc__"] = doc
    return create_model(name, **kwargs)


def schema_name(model: Type[BaseModel]) -> str:
    """Snake-case name used when handing a schema to a provider."""

    base = model.__name__
    return _CAMEL_RE.sub("_", base).lower()


def provider_schema(model: Type[BaseModel]) -> Dict[str, Any]:
    """``{"name", "schema", "strict"}`` block accepted by JSON-schema response formats."""

    return {
        "name": schema_name(model),
        "schema": model.model_json_schema(by_alias=True),
        "strict": False,
    }


__all__ = [
    "CONTRACT_CONFIG",
    "ContractConfigError",
    "coerce_string_list",
    "localize",
    "localized_text",
    "compose_model",
    "schema_name",
    "provider_schema",
]
