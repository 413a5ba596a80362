"""Secrets returned by a secret provider."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class HostSecretsInfo:
    """Host-level keys.

    Attributes:
        master_key: The host master key (``None`` if none has been issued).
        function_keys: Host keys valid for every function, by name.
        system_keys: Extension (system) keys, by name.
    """

    master_key: str | None = None
    function_keys: dict[str, str] = field(default_factory=dict)
    system_keys: dict[str, str] = field(default_factory=dict)
