"""Pure payload assembly, no I/O.

Combines the outputs of the three independent aggregation stages into the
single ``SyncPayload`` document posted to the scale controller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from functions_sync.models.payload import HostSecretsSection, SecretsSection, SyncPayload
from functions_sync.sync.metadata import apply_durable_config

if TYPE_CHECKING:
    from collections.abc import Sequence

    from functions_sync.models.durable import DurableConfig
    from functions_sync.models.payload import FunctionSecretsEntry
    from functions_sync.models.secrets import HostSecretsInfo
    from functions_sync.sync.metadata import AggregatedMetadata


def build_payload(
    metadata: AggregatedMetadata,
    durable_config: DurableConfig,
    host_secrets: HostSecretsInfo,
    function_secrets: Sequence[FunctionSecretsEntry],
) -> SyncPayload:
    """Assemble the sync document.

    Durable trigger records are enriched with the task hub binding before
    they are placed in ``triggers``.
    """
    triggers = apply_durable_config([dict(r) for r in metadata.triggers], durable_config)

    return SyncPayload(
        triggers=triggers,
        functions=list(metadata.functions),
        secrets=SecretsSection(
            host=HostSecretsSection(
                master=host_secrets.master_key,
                function=dict(host_secrets.function_keys),
                system=dict(host_secrets.system_keys),
            ),
            function=list(function_secrets),
        ),
    )
