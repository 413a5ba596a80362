"""Function descriptors — the host's view of one callable function.

Descriptors are produced by function discovery (or supplied by the
caller) and are immutable for the duration of a sync.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from functions_sync.core.constants import HTTP_TRIGGER_TYPE


@dataclass(frozen=True, slots=True)
class BindingMetadata:
    """One binding declared by a function.

    Attributes:
        type: Binding type as declared (e.g. ``"httpTrigger"``).
        direction: ``"in"``, ``"out"`` or ``"inout"``.
        name: Parameter name the binding is bound to.
        raw: The binding exactly as declared, including type-specific
            keys such as ``route`` or ``queueName``.
    """

    type: str
    direction: str = "in"
    name: str = ""
    raw: MappingProxyType[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def is_trigger(self) -> bool:
        return self.type.lower().endswith("trigger")

    @property
    def is_http_trigger(self) -> bool:
        return self.is_trigger and self.type.lower() == HTTP_TRIGGER_TYPE

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BindingMetadata:
        """Construct from a ``function.json`` binding entry."""
        return cls(
            type=str(data.get("type", "")),
            direction=str(data.get("direction", "in")),
            name=str(data.get("name", "")),
            raw=MappingProxyType(dict(data)),
        )


@dataclass(frozen=True, slots=True)
class FunctionDescriptor:
    """A function known to the host.

    Attributes:
        name: Function name (unique within the host).
        bindings: Declared bindings in declaration order.
        is_proxy: ``True`` for routing-only entries from ``proxies.json``.
        language: Worker language, if known.
        script_file: Entry point relative to the function directory.
        function_directory: Directory holding ``function.json``, if any.
        is_disabled: Whether the function is disabled.
        is_direct: Whether the function is a direct (precompiled) function.
    """

    name: str
    bindings: tuple[BindingMetadata, ...] = ()
    is_proxy: bool = False
    language: str | None = None
    script_file: str | None = None
    function_directory: Path | None = None
    is_disabled: bool = False
    is_direct: bool = False

    @property
    def trigger(self) -> BindingMetadata | None:
        """The first trigger binding, or ``None``."""
        return next((b for b in self.bindings if b.is_trigger), None)

    @property
    def is_http_triggered(self) -> bool:
        return not self.is_proxy and any(b.is_http_trigger for b in self.bindings)
