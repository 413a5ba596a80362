"""Metadata aggregation: trigger records and function projections.

Turns the host's function descriptors into the ``triggers`` and
``functions`` sections of the sync payload:

- each non-proxy descriptor with a trigger yields one trigger record (the
  trigger binding as declared, plus ``functionName``);
- every descriptor, proxies included, yields one
  ``FunctionDescriptorResponse``;
- a ``routingTrigger`` record is appended whenever ``proxies.json`` exists,
  so that proxy-only apps stay visible to the scale controller.

Descriptors are independent, so they are converted concurrently and
gathered back in input order. The first failing conversion cancels the
rest and fails the whole aggregation; there is no partial payload.
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from functions_sync.core.constants import (
    DURABLE_TRIGGER_TYPES,
    FUNCTION_METADATA_FILE_NAME,
    PROXY_METADATA_FILE_NAME,
    ROUTING_TRIGGER_TYPE,
)
from functions_sync.core.exceptions import AggregationError, SyncError
from functions_sync.models.payload import FunctionDescriptorResponse, TriggerRecord
from functions_sync.utils.helpers import gather_ordered

if TYPE_CHECKING:
    from collections.abc import Sequence

    from functions_sync.models.descriptor import FunctionDescriptor
    from functions_sync.models.durable import DurableConfig

logger = logging.getLogger("functions_sync.sync.metadata")


@dataclass(frozen=True, slots=True)
class MetadataContext:
    """Host-wide inputs to descriptor conversion.

    Attributes:
        script_root: Directory holding the function directories.
        route_prefix: HTTP route prefix from ``host.json``.
        base_url: Public base URL of the site.
    """

    script_root: Path
    route_prefix: str = "api"
    base_url: str = "http://localhost"


@dataclass(slots=True)
class AggregatedMetadata:
    """Output of ``aggregate_metadata``, in descriptor order."""

    triggers: list[TriggerRecord] = field(default_factory=list)
    functions: list[FunctionDescriptorResponse] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Per-descriptor conversion
# ---------------------------------------------------------------------------


def to_trigger_record(descriptor: FunctionDescriptor) -> TriggerRecord | None:
    """Build the trigger record for *descriptor*.

    Returns:
        A new dict (the binding's own mapping is never mutated), or
        ``None`` for proxies and for functions without a trigger.
    """
    if descriptor.is_proxy:
        return None
    trigger = descriptor.trigger
    if trigger is None:
        return None

    record: TriggerRecord = dict(trigger.raw) or {
        "type": trigger.type,
        "direction": trigger.direction,
        "name": trigger.name,
    }
    record["functionName"] = descriptor.name
    return record


async def to_function_response(
    descriptor: FunctionDescriptor,
    context: MetadataContext,
) -> FunctionDescriptorResponse:
    """Project *descriptor* to its public response shape.

    Reads the function's ``function.json`` (off the event loop) so the
    response carries the configuration as it is on disk.
    """
    base = context.base_url.rstrip("/")
    response = FunctionDescriptorResponse(
        name=descriptor.name,
        href=f"{base}/admin/functions/{descriptor.name}",
        language=descriptor.language,
        is_disabled=descriptor.is_disabled,
        is_direct=descriptor.is_direct,
        is_proxy=descriptor.is_proxy,
    )

    directory = descriptor.function_directory
    if directory is not None:
        relative = _relative_path(directory, context.script_root)
        script_root_href = f"{base}/admin/vfs/{relative}/"
        response.script_root_path_href = script_root_href
        response.config_href = f"{script_root_href}{FUNCTION_METADATA_FILE_NAME}"
        if descriptor.script_file:
            response.script_href = f"{script_root_href}{descriptor.script_file.removeprefix('./')}"
        response.config = await asyncio.to_thread(_read_function_config, directory)

    trigger = descriptor.trigger
    if not descriptor.is_proxy and trigger is not None and trigger.is_http_trigger:
        route = str(trigger.raw.get("route") or descriptor.name).lstrip("/")
        prefix = context.route_prefix.strip("/")
        response.invoke_url_template = f"{base}/{prefix}/{route}" if prefix else f"{base}/{route}"

    return response


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------


async def aggregate_metadata(
    descriptors: Sequence[FunctionDescriptor],
    context: MetadataContext,
) -> AggregatedMetadata:
    """Convert every descriptor and assemble the trigger and function lists.

    Raises:
        AggregationError: If any single descriptor fails to convert.
    """
    converted = await gather_ordered(_convert(d, context) for d in descriptors)

    result = AggregatedMetadata()
    for record, response in converted:
        if record is not None:
            result.triggers.append(record)
        result.functions.append(response)

    has_proxy_marker = await asyncio.to_thread(
        (context.script_root / PROXY_METADATA_FILE_NAME).is_file
    )
    if has_proxy_marker:
        # Appended even when no proxy descriptors exist.
        result.triggers.append({"type": ROUTING_TRIGGER_TYPE})

    logger.info(
        "Metadata aggregated | functions=%d | triggers=%d | routing_trigger=%s",
        len(result.functions),
        len(result.triggers),
        has_proxy_marker,
    )
    return result


def apply_durable_config(
    records: list[TriggerRecord],
    durable_config: DurableConfig,
) -> list[TriggerRecord]:
    """Stamp the durable-task hub binding onto durable trigger records.

    Only ``orchestrationTrigger`` and ``activityTrigger`` records
    (case-insensitive) are touched, and only with the fields the config
    actually has. Records are updated in place and returned.
    """
    if durable_config.is_empty:
        return records

    for record in records:
        if str(record.get("type", "")).lower() not in DURABLE_TRIGGER_TYPES:
            continue
        if durable_config.hub_name is not None:
            record["taskHubName"] = durable_config.hub_name
        if durable_config.connection is not None:
            record["connection"] = durable_config.connection
    return records


async def _convert(
    descriptor: FunctionDescriptor,
    context: MetadataContext,
) -> tuple[TriggerRecord | None, FunctionDescriptorResponse]:
    try:
        record = to_trigger_record(descriptor)
        response = await to_function_response(descriptor, context)
    except AggregationError:
        raise
    except (SyncError, OSError, ValueError, TypeError) as exc:
        msg = f"Failed to convert function {descriptor.name!r}: {exc}"
        raise AggregationError(msg, stage="metadata", code="FUNCTION_CONVERSION_FAILED") from exc
    return record, response


def _read_function_config(directory: Path) -> dict[str, Any]:
    path = directory / FUNCTION_METADATA_FILE_NAME
    if not path.is_file():
        return {}
    config = json.loads(path.read_text(encoding="utf-8-sig"))
    if not isinstance(config, dict):
        msg = f"{path} must contain a JSON object"
        raise ValueError(msg)
    return config


def _relative_path(directory: Path, root: Path) -> str:
    try:
        return directory.relative_to(root).as_posix()
    except ValueError:
        return directory.name
