from __future__ import annotations

from typing import Any, Callable, Dict, Iterable

from . import ensure_adapters_loaded
from .base import StructuredGenerator

__all__ = ["register_generator", "get_generator", "list_registered_generators"]

_GENERATOR_REGISTRY: Dict[str, Callable[..., StructuredGenerator]] = {}


def _normalize(name: str) -> str:
    return (name or "").strip().lower()


def register_generator(*, aliases: Iterable[str], factory: Callable[..., StructuredGenerator]) -> None:
    """Register a generator factory for one or more aliases.

    Adapter modules call this at import time so new backends only need to add a module.
    """

    if not callable(factory):
        raise TypeError("factory must be callable")

    alias_list = [_normalize(alias) for alias in aliases if _normalize(alias)]
    if not alias_list:
        raise ValueError("At least one non-empty alias is required")

    for alias in alias_list:
        existing = _GENERATOR_REGISTRY.get(alias)
        if existing is not None and existing is not factory:
            raise ValueError(f"Alias '{alias}' already registered to a different generator")
        _GENERATOR_REGISTRY[alias] = factory


def get_generator(name: str, **kwargs: Any) -> StructuredGenerator:
    """Instantiate the generator registered under ``name``."""

    ensure_adapters_loaded()
    key = _normalize(name)
    if not key:
        raise ValueError("generator name must be a non-empty string")
    try:
        factory = _GENERATOR_REGISTRY[key]
    except KeyError as exc:
        raise ValueError(f"No generator registered for name='{name}'") from exc
    return factory(**kwargs)


def list_registered_generators() -> list[str]:
    """Return the registered generator aliases (lowercase)."""

    ensure_adapters_loaded()
    return sorted(_GENERATOR_REGISTRY.keys())
