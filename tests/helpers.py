"""Helpers for building script roots in tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

# Hex-encoded 32-byte signing key used by every test that signs a token.
TEST_SIGNING_KEY = "00112233445566778899aabbccddeeff00112233445566778899aabbccddeeff"


def write_json(path: Path, document: Any) -> Path:
    """Write *document* as JSON to *path*, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


def write_function(root: Path, name: str, *bindings: dict[str, Any], **extra: Any) -> Path:
    """Create ``<root>/<name>/function.json`` declaring *bindings*."""
    return write_json(root / name / "function.json", {"bindings": list(bindings), **extra})


def http_binding(**extra: Any) -> dict[str, Any]:
    return {"authLevel": "anonymous", "type": "httpTrigger", "direction": "in", "name": "req", **extra}


def queue_binding(trigger_type: str) -> dict[str, Any]:
    return {
        "name": "myQueueItem",
        "type": trigger_type,
        "direction": "in",
        "queueName": "myqueue-items",
        "connection": "",
    }
