"""Canonical wire contracts for the sync payload.

Each section of the JSON document is defined here as a ``TypedDict``.
This module is the single source of truth for wire key names; the
drift-detection tests check that ``SyncPayload.to_dict()`` produces
exactly these keys.

Trigger records are passthrough mappings, so ``TriggerContract`` only
names the keys this package reads or writes.
"""

from __future__ import annotations

from typing import Any, NotRequired, TypedDict


class TriggerContract(TypedDict):
    """Known keys of a trigger record."""

    type: str
    functionName: NotRequired[str]  # noqa: N815
    direction: NotRequired[str]
    name: NotRequired[str]
    taskHubName: NotRequired[str]  # noqa: N815
    connection: NotRequired[str]


class FunctionContract(TypedDict):
    """One entry of ``functions``."""

    name: str
    script_root_path_href: str | None
    script_href: str | None
    config_href: str | None
    href: str | None
    invoke_url_template: str | None
    language: str | None
    config: dict[str, Any]
    isDisabled: bool  # noqa: N815
    isDirect: bool  # noqa: N815
    isProxy: bool  # noqa: N815


class HostSecretsContract(TypedDict):
    """``secrets.host``."""

    master: str | None
    function: dict[str, str]
    system: dict[str, str]


class FunctionSecretsContract(TypedDict):
    """One entry of ``secrets.function``."""

    name: str
    secrets: dict[str, str]


class SecretsContract(TypedDict):
    """``secrets``."""

    host: HostSecretsContract
    function: list[FunctionSecretsContract]


class SyncPayloadContract(TypedDict):
    """The whole document posted to ``/operations/settriggers``."""

    triggers: list[TriggerContract]
    functions: list[FunctionContract]
    secrets: SecretsContract
