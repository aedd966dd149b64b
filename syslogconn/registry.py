"""Process-wide registry of host-facing modules."""

from __future__ import annotations

import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class ModuleExports:
    """Callables a module exposes to its host, keyed by export name."""

    named: Mapping[str, Callable[..., Any]] = field(default_factory=dict)

    def __getitem__(self, name: str) -> Callable[..., Any]:
        return self.named[name]

    def __contains__(self, name: object) -> bool:
        return name in self.named


@runtime_checkable
class HostModule(Protocol):
    """Protocol for objects that can be registered with a host."""

    def exports(self) -> ModuleExports: ...


@dataclass(slots=True)
class ModuleRegistry:
    """Thread-safe name to module mapping."""

    _lock: threading.Lock = field(default_factory=threading.Lock)
    _modules: dict[str, HostModule] = field(default_factory=dict)

    def register(self, name: str, module: HostModule) -> None:
        """Register ``module`` under ``name``.

        Raises:
            ValueError: If the name is empty or already taken
        """
        if not name:
            raise ValueError("Module name cannot be empty")
        with self._lock:
            if name in self._modules:
                raise ValueError(f"Module already registered: {name}")
            self._modules[name] = module

    def unregister(self, name: str) -> None:
        """Remove a module if present."""
        with self._lock:
            self._modules.pop(name, None)

    def get(self, name: str) -> HostModule:
        """Return the module registered under ``name``.

        Raises:
            KeyError: If no module has that name
        """
        with self._lock:
            try:
                return self._modules[name]
            except KeyError:
                raise KeyError(f"Unknown module: {name}") from None

    def names(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(sorted(self._modules))

    def clear(self) -> None:
        with self._lock:
            self._modules.clear()


_module_registry: ModuleRegistry | None = None


def get_module_registry() -> ModuleRegistry:
    """Return the shared module registry."""
    global _module_registry
    if _module_registry is None:
        _module_registry = ModuleRegistry()
    return _module_registry


def register_module(name: str, module: HostModule) -> None:
    """Register ``module`` with the shared registry."""
    get_module_registry().register(name, module)
