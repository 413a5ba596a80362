"""Parsing of the host's JSON secret documents.

Host secrets (``host.json`` in the secret store)::

    {
        "masterKey": {"name": "master", "value": "...", "encrypted": false},
        "functionKeys": [{"name": "default", "value": "...", "encrypted": false}],
        "systemKeys": [{"name": "durabletask_extension", "value": "...", "encrypted": false}]
    }

Function secrets (``<function name>.json``)::

    {"keys": [{"name": "default", "value": "...", "encrypted": false}]}

Both the file and blob stores keep the same documents, so they share
these helpers.
"""

from __future__ import annotations

import json
from typing import Any

from functions_sync.models.secrets import HostSecretsInfo
from functions_sync.providers.base import SecretProviderError

HOST_SECRETS_DOCUMENT: str = "host.json"


def function_secrets_document(function_name: str) -> str:
    """Name of the secrets document for *function_name*."""
    return f"{function_name.lower()}.json"


def parse_host_secrets(provider: str, text: str | None) -> HostSecretsInfo:
    """Parse a host secrets document; ``None`` means no document yet."""
    if text is None:
        return HostSecretsInfo()

    document = _load(provider, text, HOST_SECRETS_DOCUMENT)
    master = document.get("masterKey")
    master_key = _key_value(provider, master) if isinstance(master, dict) else None

    return HostSecretsInfo(
        master_key=master_key,
        function_keys=_key_list(provider, document.get("functionKeys")),
        system_keys=_key_list(provider, document.get("systemKeys")),
    )


def parse_function_secrets(provider: str, function_name: str, text: str | None) -> dict[str, str]:
    """Parse a function secrets document; ``None`` means no keys."""
    if text is None:
        return {}
    document = _load(provider, text, function_secrets_document(function_name))
    return _key_list(provider, document.get("keys"))


def _load(provider: str, text: str, document_name: str) -> dict[str, Any]:
    try:
        document = json.loads(text)
    except (json.JSONDecodeError, ValueError) as exc:
        msg = f"Secrets document {document_name!r} is not valid JSON: {exc}"
        raise SecretProviderError(provider, msg) from exc
    if not isinstance(document, dict):
        msg = f"Secrets document {document_name!r} must be a JSON object"
        raise SecretProviderError(provider, msg)
    return document


def _key_list(provider: str, entries: object) -> dict[str, str]:
    if entries is None:
        return {}
    if not isinstance(entries, list):
        msg = f"Expected a list of keys, got {type(entries).__name__}"
        raise SecretProviderError(provider, msg)

    keys: dict[str, str] = {}
    for entry in entries:
        if not isinstance(entry, dict) or not entry.get("name"):
            msg = f"Malformed key entry: {entry!r}"
            raise SecretProviderError(provider, msg)
        keys[str(entry["name"])] = _key_value(provider, entry)
    return keys


def _key_value(provider: str, entry: dict[str, Any]) -> str:
    if entry.get("encrypted"):
        msg = f"Key {entry.get('name')!r} is encrypted; encrypted secrets are not supported"
        raise SecretProviderError(provider, msg)
    return str(entry.get("value", ""))
