"""Enumerate the functions under the script root.

Each sub-directory holding a ``function.json`` is one function; each
entry of the ``proxies`` object in ``proxies.json`` is one routing-only
(proxy) function. Only the fields the sync needs are read; binding
semantics are passed through untouched.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from functions_sync.core.constants import FUNCTION_METADATA_FILE_NAME, PROXY_METADATA_FILE_NAME
from functions_sync.core.exceptions import AggregationError
from functions_sync.models.descriptor import BindingMetadata, FunctionDescriptor

logger = logging.getLogger("functions_sync.sync.discovery")

_LANGUAGE_BY_EXTENSION: dict[str, str] = {
    ".py": "python",
    ".js": "node",
    ".mjs": "node",
    ".cjs": "node",
    ".ps1": "powershell",
    ".dll": "dotnet-isolated",
    ".jar": "java",
}


def discover_functions(root: Path) -> list[FunctionDescriptor]:
    """Return every function under *root*, proxies last.

    Regular functions are sorted by directory name; proxies keep their
    declaration order.

    Raises:
        AggregationError: If a ``function.json`` or ``proxies.json``
            cannot be parsed.
    """
    root = Path(root)
    descriptors: list[FunctionDescriptor] = []

    if root.is_dir():
        for directory in sorted(p for p in root.iterdir() if p.is_dir()):
            metadata_path = directory / FUNCTION_METADATA_FILE_NAME
            if metadata_path.is_file():
                descriptors.append(_read_function(directory, metadata_path))

    descriptors.extend(_read_proxies(root / PROXY_METADATA_FILE_NAME))

    logger.info(
        "Functions discovered | root=%s | functions=%d | proxies=%d",
        root,
        sum(1 for d in descriptors if not d.is_proxy),
        sum(1 for d in descriptors if d.is_proxy),
    )
    return descriptors


def _read_function(directory: Path, metadata_path: Path) -> FunctionDescriptor:
    config = _load_object(metadata_path)

    raw_bindings = config.get("bindings", [])
    if not isinstance(raw_bindings, list) or not all(isinstance(b, dict) for b in raw_bindings):
        msg = f"{metadata_path}: 'bindings' must be a list of objects"
        raise AggregationError(msg, stage="discovery", code="INVALID_FUNCTION_METADATA")

    script_file = config.get("scriptFile")
    language = None
    if isinstance(script_file, str):
        language = _LANGUAGE_BY_EXTENSION.get(Path(script_file).suffix.lower())

    return FunctionDescriptor(
        name=directory.name,
        bindings=tuple(BindingMetadata.from_dict(b) for b in raw_bindings),
        language=language,
        script_file=script_file if isinstance(script_file, str) else None,
        function_directory=directory,
        is_disabled=bool(config.get("disabled", False)),
        is_direct=bool(config.get("configurationSource") == "attributes"),
    )


def _read_proxies(path: Path) -> list[FunctionDescriptor]:
    if not path.is_file():
        return []

    proxies = _load_object(path).get("proxies") or {}
    if not isinstance(proxies, dict):
        msg = f"{path}: 'proxies' must be an object"
        raise AggregationError(msg, stage="discovery", code="INVALID_PROXY_METADATA")

    return [
        FunctionDescriptor(
            name=name,
            bindings=(
                BindingMetadata.from_dict({"type": "httpTrigger", "direction": "in", "name": "req"}),
            ),
            is_proxy=True,
            is_disabled=bool(isinstance(proxy, dict) and proxy.get("disabled", False)),
        )
        for name, proxy in proxies.items()
    ]


def _load_object(path: Path) -> dict[str, Any]:
    try:
        document = json.loads(path.read_text(encoding="utf-8-sig"))
    except (OSError, ValueError) as exc:
        msg = f"Failed to read {path}: {exc}"
        raise AggregationError(msg, stage="discovery", code="INVALID_FUNCTION_METADATA") from exc
    if not isinstance(document, dict):
        msg = f"{path} must contain a JSON object"
        raise AggregationError(msg, stage="discovery", code="INVALID_FUNCTION_METADATA")
    return document
