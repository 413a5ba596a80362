"""Azure Functions entry point — sync triggers.

This module registers the Azure Functions that push the host's trigger
metadata to the scale controller, using the Python v2 programming model.

All business logic lives in the functions_sync package. This file is purely
the wiring layer between Azure Functions bindings and application code.
"""

from __future__ import annotations

import json
import logging

import azure.functions as func
import httpx

from functions_sync.core.exceptions import SyncError
from functions_sync.sync.manager import FunctionsSyncManager

app = func.FunctionApp()

logger = logging.getLogger("functions_sync.function_app")


def _json_response(body: dict[str, object], status_code: int) -> func.HttpResponse:
    return func.HttpResponse(
        json.dumps(body),
        status_code=status_code,
        mimetype="application/json",
    )


# ---------------------------------------------------------------------------
# HTTP: Sync Triggers (admin)
# ---------------------------------------------------------------------------


@app.function_name("sync_triggers")
@app.route(route="synctriggers", methods=["POST"], auth_level=func.AuthLevel.ADMIN)
async def sync_triggers(req: func.HttpRequest) -> func.HttpResponse:
    """Run one sync on demand.

    Returns ``200 {"status": "success"}`` when the scale controller
    accepted the payload, otherwise ``500`` with the failure reason.
    """
    logger.info("Sync triggers requested | method=%s | url=%s", req.method, req.url)

    try:
        result = await FunctionsSyncManager().try_sync_triggers()
    except SyncError as exc:
        logger.error("Sync triggers aborted | %s", exc.to_error_dict())
        return _json_response({"status": "failed", "error": exc.message}, 500)
    except httpx.TransportError as exc:
        logger.error("Sync triggers request failed | error=%s", exc)
        return _json_response({"status": "failed", "error": str(exc)}, 500)

    if result.success:
        return _json_response({"status": "success"}, 200)
    return _json_response({"status": "failed", "error": result.error}, 500)


# ---------------------------------------------------------------------------
# Timer: Periodic Sync
# ---------------------------------------------------------------------------


@app.function_name("sync_triggers_timer")
@app.timer_trigger(schedule="%SYNC_TRIGGERS_SCHEDULE%", arg_name="timer", run_on_startup=False)
async def sync_triggers_timer(timer: func.TimerRequest) -> None:
    """Run one sync on a schedule.

    A rejected sync is logged; configuration, aggregation and transport
    errors propagate so the runtime records a failed invocation.
    """
    if timer.past_due:
        logger.warning("Sync triggers timer is past due")

    success, error = await FunctionsSyncManager().try_sync_triggers()
    if not success:
        logger.warning("Scheduled sync triggers failed | error=%s", error)
