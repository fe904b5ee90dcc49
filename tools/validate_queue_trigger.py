#!/usr/bin/env python3
# ============================================================================
# CLI QUEUE TRIGGER VALIDATION TOOL
# ============================================================================
# STATUS: Tool - Round-trip a message through the deployed queue trigger
# PURPOSE: Post-deployment check for function_app.py:queue_trigger_echo
# CREATED: 17 OCT 2026
# ============================================================================
"""
Send a base64-encoded probe to the input queue and wait for the deployed
function to echo it to the output queue.

Usage:
    # Connection string from AzureWebJobsStorage
    python tools/validate_queue_trigger.py

    # Explicit queues and a longer wait
    python tools/validate_queue_trigger.py --input-queue test-input-python \\
        --output-queue test-output-python --max-tries 60 --wait-seconds 5

    # Fixed probe text
    python tools/validate_queue_trigger.py --message "hello from CI"

Requires:
    AzureWebJobsStorage env var (or --connection-string)

Exit status is 0 when the echo arrived, 1 otherwise.
"""

import argparse
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.errors import PipelineRunnerError
from core.logging import configure_logging
from function.config import DEFAULT_INPUT_QUEUE, DEFAULT_OUTPUT_QUEUE


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Validate a deployed queue-triggered function with one round trip",
    )
    parser.add_argument(
        "--connection-string",
        default=os.environ.get("AzureWebJobsStorage"),
        help="Storage connection string (default: AzureWebJobsStorage env var)",
    )
    parser.add_argument(
        "--input-queue",
        default=os.environ.get("QUEUE_TRIGGER_INPUT", DEFAULT_INPUT_QUEUE),
        help=f"Queue the function listens on (default: {DEFAULT_INPUT_QUEUE})",
    )
    parser.add_argument(
        "--output-queue",
        default=os.environ.get("QUEUE_TRIGGER_OUTPUT", DEFAULT_OUTPUT_QUEUE),
        help=f"Queue the function writes to (default: {DEFAULT_OUTPUT_QUEUE})",
    )
    parser.add_argument("--message", help="Probe text (default: unique generated text)")
    parser.add_argument("--max-tries", type=int, default=30, help="Output queue polls (default: 30)")
    parser.add_argument("--wait-seconds", type=float, default=2.0, help="Seconds between polls (default: 2)")
    parser.add_argument("--log-level", default=os.environ.get("LOG_LEVEL", "INFO"))

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if not args.connection_string:
        print("ERROR: Set AzureWebJobsStorage or pass --connection-string", file=sys.stderr)
        return 1

    from infrastructure.queue_storage import QueueRepository
    from services.queue_validation import QueueTriggerValidator

    validator = QueueTriggerValidator(
        queues=QueueRepository.from_connection_string(args.connection_string),
        input_queue=args.input_queue,
        output_queue=args.output_queue,
        max_tries=args.max_tries,
        wait_seconds=args.wait_seconds,
    )

    try:
        result = validator.run(args.message)
    except PipelineRunnerError as e:
        print(f"FAILED: {e}", file=sys.stderr)
        return 1

    print(f"OK: echo {result.received_message_id} received after {result.attempts} poll(s)")
    print(f"    content: {result.content}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
