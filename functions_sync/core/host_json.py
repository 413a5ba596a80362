"""Read-only views over the host's ``host.json``.

``host.json`` is usually hand edited, so section and key lookups are
case-insensitive. Keys are lower-cased once when the document is loaded
(``_casefold_keys``) instead of being compared ad hoc at every lookup.

Three views are provided:

- **read_durable_config** — the durable-task hub name and storage
  connection reference used to enrich durable triggers. Errors here are
  fatal for a sync.
- **get_route_prefix** — the HTTP route prefix used to build function
  invoke URLs. Best effort, never raises.
- **log_host_origin** — logs the optional ``origin`` block that records
  where the app was deployed from. Best effort, never raises.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from functions_sync.core.constants import (
    DEFAULT_ROUTE_PREFIX,
    DURABLE_CONNECTION_KEY,
    DURABLE_HUB_NAME_KEY,
    DURABLE_TASK_SECTION,
    HOST_METADATA_FILE_NAME,
)
from functions_sync.core.exceptions import ConfigurationError
from functions_sync.models.durable import DurableConfig

logger = logging.getLogger("functions_sync.core.host_json")

_INVALID_DURABLE_TASK = "Invalid host.json configuration for 'durableTask'."


def read_host_json(root: Path) -> dict[str, Any] | None:
    """Load ``host.json`` from *root* with case-folded top-level keys.

    Returns:
        The parsed document, or ``None`` if the file does not exist.

    Raises:
        ConfigurationError: If the file is not valid JSON or is not an object.
    """
    path = Path(root) / HOST_METADATA_FILE_NAME
    if not path.is_file():
        return None

    try:
        document = json.loads(path.read_text(encoding="utf-8-sig"))
    except (json.JSONDecodeError, ValueError) as exc:
        msg = f"{HOST_METADATA_FILE_NAME} is not valid JSON: {exc}"
        raise ConfigurationError(msg, stage="host_json", code="INVALID_HOST_JSON") from exc

    if not isinstance(document, dict):
        msg = f"{HOST_METADATA_FILE_NAME} must be a JSON object, got {type(document).__name__}"
        raise ConfigurationError(msg, stage="host_json", code="INVALID_HOST_JSON")

    return _casefold_keys(document)


def read_durable_config(root: Path) -> DurableConfig:
    """Read the ``durableTask`` hub binding from ``host.json``.

    We're looking for::

        {
            "durableTask": {
                "hubName": "<hub>",
                "azureStorageConnectionStringName": "<setting name>"
            }
        }

    Returns:
        A ``DurableConfig``; empty when the file or section is missing or
        the section is ``null``.

    Raises:
        ConfigurationError: If ``host.json`` cannot be parsed (code
            ``INVALID_HOST_JSON``) or the ``durableTask`` section is not an
            object of scalar values (code ``INVALID_DURABLE_TASK_CONFIG``).
    """
    document = read_host_json(root)
    if document is None:
        return DurableConfig()

    section = document.get(DURABLE_TASK_SECTION)
    if section is None:
        return DurableConfig()

    if not isinstance(section, dict):
        raise ConfigurationError(
            _INVALID_DURABLE_TASK,
            stage="durable_config",
            code="INVALID_DURABLE_TASK_CONFIG",
        )

    values = _casefold_keys(section)
    config = DurableConfig(
        hub_name=_scalar(values.get(DURABLE_HUB_NAME_KEY)),
        connection=_scalar(values.get(DURABLE_CONNECTION_KEY)),
    )

    logger.debug(
        "Durable task config read | hub_name=%s | connection=%s",
        config.hub_name,
        config.connection,
    )
    return config


def get_route_prefix(root: Path) -> str:
    """Return ``extensions.http.routePrefix`` from ``host.json``.

    Falls back to ``"api"`` when the file is missing, unparsable, or does
    not set the prefix.
    """
    try:
        document = read_host_json(root)
    except ConfigurationError:
        logger.warning("Ignoring unreadable %s for route prefix", HOST_METADATA_FILE_NAME)
        return DEFAULT_ROUTE_PREFIX

    if document is None:
        return DEFAULT_ROUTE_PREFIX

    extensions = document.get("extensions")
    if not isinstance(extensions, dict):
        return DEFAULT_ROUTE_PREFIX
    http = _casefold_keys(extensions).get("http")
    if not isinstance(http, dict):
        return DEFAULT_ROUTE_PREFIX

    prefix = _casefold_keys(http).get("routeprefix")
    return prefix if isinstance(prefix, str) else DEFAULT_ROUTE_PREFIX


def log_host_origin(root: Path) -> bool:
    """Log the ``origin`` block of ``host.json`` if there is one.

    Returns:
        ``True`` if an origin was found and logged.
    """
    try:
        document = read_host_json(root)
    except ConfigurationError:
        return False

    origin = (document or {}).get("origin")
    if origin is None:
        return False

    logger.info("Origin found:\n%s", json.dumps(origin, indent=2))
    return True


def _casefold_keys(mapping: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of *mapping* with lower-cased keys (first spelling wins)."""
    folded: dict[str, Any] = {}
    for key, value in mapping.items():
        folded.setdefault(str(key).lower(), value)
    return folded


def _scalar(value: object) -> str | None:
    """Coerce a durable-task sub-value to a string; ``null`` means absent."""
    if value is None:
        return None
    if isinstance(value, dict | list):
        raise ConfigurationError(
            _INVALID_DURABLE_TASK,
            stage="durable_config",
            code="INVALID_DURABLE_TASK_CONFIG",
        )
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
