"""Durable-task hub binding read from ``host.json``."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DurableConfig:
    """Hub name and storage connection reference for durable triggers.

    Both fields are ``None`` when ``host.json`` or its ``durableTask``
    section is missing.

    Attributes:
        hub_name: Task hub the orchestration and activity triggers listen on.
        connection: Name of the app setting holding the hub's storage
            connection string.
    """

    hub_name: str | None = None
    connection: str | None = None

    @property
    def is_empty(self) -> bool:
        return self.hub_name is None and self.connection is None
