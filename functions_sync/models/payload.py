"""Pydantic model of the sync payload sent to the scale controller.

The document has three top-level sections:

- **triggers**: one record per triggered, non-proxy function (plus a
  trailing ``routingTrigger`` record when the app has proxies)
- **functions**: the public projection of every function, proxies included
- **secrets**: host keys (``host``) and per-function keys (``function``)

Host-wide and per-function secrets are separate sections because they
have different consumers on the control-plane side.

Field order in these models is the key order on the wire.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

#: A trigger binding as declared, plus ``functionName`` and any durable
#: enrichment. Passed through without interpretation.
TriggerRecord = dict[str, Any]


class FunctionDescriptorResponse(BaseModel):
    """Public projection of one function.

    Attributes:
        name: Function name.
        script_root_path_href: VFS URL of the function directory.
        script_href: VFS URL of the entry point script.
        config_href: VFS URL of ``function.json``.
        href: Admin API URL of the function.
        invoke_url_template: Public invoke URL (HTTP-triggered functions only).
        language: Worker language, if known.
        config: Parsed ``function.json`` (empty for proxies).
        is_disabled: Whether the function is disabled.
        is_direct: Whether the function is a direct (precompiled) function.
        is_proxy: Whether this is a routing-only entry.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str
    script_root_path_href: str | None = None
    script_href: str | None = None
    config_href: str | None = None
    href: str | None = None
    invoke_url_template: str | None = None
    language: str | None = None
    config: dict[str, Any] = Field(default_factory=dict)
    is_disabled: bool = Field(default=False, alias="isDisabled")
    is_direct: bool = Field(default=False, alias="isDirect")
    is_proxy: bool = Field(default=False, alias="isProxy")


class HostSecretsSection(BaseModel):
    """``secrets.host``: master, host function keys and system keys."""

    master: str | None = None
    function: dict[str, str] = Field(default_factory=dict)
    system: dict[str, str] = Field(default_factory=dict)


class FunctionSecretsEntry(BaseModel):
    """``secrets.function[]``: keys of one HTTP-triggered function."""

    name: str
    secrets: dict[str, str] = Field(default_factory=dict)


class SecretsSection(BaseModel):
    """``secrets``: host keys and per-function keys."""

    host: HostSecretsSection = Field(default_factory=HostSecretsSection)
    function: list[FunctionSecretsEntry] = Field(default_factory=list)


class SyncPayload(BaseModel):
    """Top-level sync document."""

    triggers: list[TriggerRecord] = Field(default_factory=list)
    functions: list[FunctionDescriptorResponse] = Field(default_factory=list)
    secrets: SecretsSection = Field(default_factory=SecretsSection)

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a JSON-compatible dict with wire key names."""
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self) -> str:
        """Serialise to a compact JSON string with wire key names."""
        return self.model_dump_json(by_alias=True)

    def to_bytes(self) -> bytes:
        """Serialise to UTF-8 JSON bytes, ready to send."""
        return self.to_json().encode("utf-8")
