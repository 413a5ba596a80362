"""Shared sync constants — single source of truth.

Centralises the well-known host file names, environment variable names,
wire headers and binding type names used across the sync stages.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Host file layout
# ---------------------------------------------------------------------------

HOST_METADATA_FILE_NAME: str = "host.json"
"""Host configuration document at the script root."""

PROXY_METADATA_FILE_NAME: str = "proxies.json"
"""Routing-only (proxy) definitions at the script root."""

FUNCTION_METADATA_FILE_NAME: str = "function.json"
"""Per-function binding definition inside each function directory."""

DEFAULT_ROUTE_PREFIX: str = "api"
"""HTTP route prefix used when ``host.json`` does not override it."""

# ---------------------------------------------------------------------------
# host.json keys (compared case-insensitively)
# ---------------------------------------------------------------------------

DURABLE_TASK_SECTION: str = "durabletask"
DURABLE_HUB_NAME_KEY: str = "hubname"
DURABLE_CONNECTION_KEY: str = "azurestorageconnectionstringname"

# ---------------------------------------------------------------------------
# Trigger types
# ---------------------------------------------------------------------------

HTTP_TRIGGER_TYPE: str = "httptrigger"
ORCHESTRATION_TRIGGER_TYPE: str = "orchestrationtrigger"
ACTIVITY_TRIGGER_TYPE: str = "activitytrigger"
ROUTING_TRIGGER_TYPE: str = "routingTrigger"

DURABLE_TRIGGER_TYPES: frozenset[str] = frozenset(
    {ORCHESTRATION_TRIGGER_TYPE, ACTIVITY_TRIGGER_TYPE}
)

# ---------------------------------------------------------------------------
# Environment variables
# ---------------------------------------------------------------------------

ENV_SCRIPT_ROOT: str = "AzureWebJobsScriptRoot"
ENV_SITE_HOSTNAME: str = "WEBSITE_HOSTNAME"
ENV_SKIP_SSL_VALIDATION: str = "SCM_SKIP_SSL_VALIDATION"
ENV_AUTH_ENCRYPTION_KEY: str = "WEBSITE_AUTH_ENCRYPTION_KEY"
ENV_SECRET_STORAGE_TYPE: str = "AzureWebJobsSecretStorageType"
ENV_SECRET_STORAGE_PATH: str = "AzureWebJobsSecretStoragePath"
ENV_HOST_ID: str = "AzureFunctionsHostId"
ENV_HTTP_TIMEOUT: str = "SYNC_TRIGGERS_HTTP_TIMEOUT"
ENV_STORAGE_CONNECTION: str = "AzureWebJobsStorage"

# ---------------------------------------------------------------------------
# Outbound wire protocol
# ---------------------------------------------------------------------------

SET_TRIGGERS_PATH: str = "/operations/settriggers"

# The front end only forwards requests whose user agent starts with Mozilla.
SYNC_USER_AGENT: str = "Mozilla/5.0"

SITE_TOKEN_HEADER: str = "x-ms-site-restricted-token"

JSON_CONTENT_TYPE: str = "application/json; charset=utf-8"

TOKEN_LIFETIME_MINUTES: int = 5
