# ============================================================================
# PIPELINE RUNNER - Azure Function App (Queue Trigger)
# ============================================================================
# STATUS: Function - Queue-triggered echo used for deployment validation
# PURPOSE: Echo every input-queue message to the output queue
# CREATED: 17 OCT 2026
# ============================================================================
"""
Pipeline Runner Queue Trigger Function App

Azure Functions V2 entry point providing:
- queue_trigger_echo: input queue -> output queue, body unchanged
- /api/livez: liveness probe

tools/validate_queue_trigger.py sends a probe to the input queue and waits
for the echo on the output queue, which proves the deployed app is indexed,
bound to the right storage account and processing messages.

App settings:
- AzureWebJobsStorage (or the setting named by QUEUE_TRIGGER_CONNECTION)
- QUEUE_TRIGGER_INPUT / QUEUE_TRIGGER_OUTPUT
"""

import azure.functions as func
import json
import logging

from function.config import get_config
from function.queue_echo import echo_message_body

# ============================================================================
# CREATE APP
# ============================================================================

app = func.FunctionApp(http_auth_level=func.AuthLevel.ANONYMOUS)

logger = logging.getLogger(__name__)

_config = get_config()
logger.info(
    f"Queue trigger app starting: {_config.input_queue} -> {_config.output_queue} "
    f"(connection setting {_config.storage_connection_setting})"
)

# ============================================================================
# PROBES
# ============================================================================


@app.route(route="livez", methods=["GET"])
def liveness_probe(req: func.HttpRequest) -> func.HttpResponse:
    """
    Liveness probe - always returns 200 if function is running.

    GET /api/livez
    """
    return func.HttpResponse(
        json.dumps({
            "alive": True,
            "service": _config.service_name,
            "input_queue": _config.input_queue,
            "output_queue": _config.output_queue,
        }),
        status_code=200,
        headers={"Content-Type": "application/json"},
    )


# ============================================================================
# QUEUE TRIGGER
# ============================================================================


@app.queue_trigger(
    arg_name="msg",
    queue_name=_config.input_queue,
    connection=_config.storage_connection_setting,
)
@app.queue_output(
    arg_name="outputmsg",
    queue_name=_config.output_queue,
    connection=_config.storage_connection_setting,
)
def queue_trigger_echo(msg: func.QueueMessage, outputmsg: func.Out[str]) -> None:
    """Echo the triggering message to the output queue."""
    outputmsg.set(echo_message_body(msg.get_body(), message_id=msg.id))


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = ["app"]
