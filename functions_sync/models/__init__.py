"""Data models and schemas.

Defines the data structures used throughout the sync:
- FunctionDescriptor: A function known to the host and its bindings
- DurableConfig: Durable-task hub binding from host.json
- HostSecretsInfo: Host-level keys from the secret provider
- SyncPayload: The document posted to the scale controller
"""

from functions_sync.models.descriptor import BindingMetadata, FunctionDescriptor
from functions_sync.models.durable import DurableConfig
from functions_sync.models.payload import (
    FunctionDescriptorResponse,
    FunctionSecretsEntry,
    HostSecretsSection,
    SecretsSection,
    SyncPayload,
    TriggerRecord,
)
from functions_sync.models.secrets import HostSecretsInfo

__all__ = [
    "BindingMetadata",
    "DurableConfig",
    "FunctionDescriptor",
    "FunctionDescriptorResponse",
    "FunctionSecretsEntry",
    "HostSecretsInfo",
    "HostSecretsSection",
    "SecretsSection",
    "SyncPayload",
    "TriggerRecord",
]
