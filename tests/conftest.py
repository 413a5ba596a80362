"""Shared pytest fixtures for the sync triggers test suite."""

from __future__ import annotations

from pathlib import Path

import pytest
from helpers import TEST_SIGNING_KEY, http_binding, queue_binding, write_function, write_json

from functions_sync.core.config import SyncConfig

# ---------------------------------------------------------------------------
# Script root fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def script_root(tmp_path: Path) -> Path:
    """An empty script root."""
    root = tmp_path / "wwwroot"
    root.mkdir()
    return root


@pytest.fixture()
def durable_app(script_root: Path) -> Path:
    """A script root with one HTTP, one orchestration and one activity function."""
    write_json(
        script_root / "host.json",
        {
            "durableTask": {
                "HubName": "TestHubValue",
                "azureStorageConnectionStringName": "DurableStorage",
            }
        },
    )
    write_function(script_root, "function1", http_binding())
    write_function(script_root, "function2", queue_binding("orchestrationTrigger"))
    write_function(script_root, "function3", queue_binding("activityTrigger"))
    return script_root


# ---------------------------------------------------------------------------
# Configuration fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sync_config(script_root: Path) -> SyncConfig:
    """Configuration pointing at *script_root* and ``sitename.azurewebsites.net``."""
    return SyncConfig(
        script_root=script_root,
        site_hostname="sitename.azurewebsites.net",
        auth_encryption_key=TEST_SIGNING_KEY,
        secrets_path=script_root / ".secrets",
    )
