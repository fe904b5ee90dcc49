#!/usr/bin/env python3
# ============================================================================
# CLI PIPELINE RUNNER
# ============================================================================
# STATUS: Tool - Queue a DevOps pipeline, wait, publish results
# PURPOSE: Entry point for scheduled/CI pipeline runs
# CREATED: 16 OCT 2026
# ============================================================================
"""
Queue an Azure DevOps pipeline, wait for it, and publish badges + results.

Steps (see services/workflow.py):
1. Parse --pipeline-parameters, build the run request
2. Verify storage credentials, queue the build
3. Poll until the build leaves notStarted/inProgress
4. Render badges, write pipeline-results.json
5. Upload the results folder to {version}/{pipeline folder}/

Usage:
    python tools/run_pipeline.py \\
        --storage-account-name mystorage --functions-version 4.0 \\
        --devops-user-name builder --organization-name contoso --project-name functions \\
        --pipeline-name "Nightly Tests" --pipeline-definition-id 21 \\
        --pipeline-parameters "Runtime=python;Smoke=true" --pipeline-type Test

Secrets are best supplied via environment:
    STORAGE_ACCOUNT_KEY, DEVOPS_USER_PAT

Exit status is 0 when the run was queued, finished and uploaded; 1 otherwise.
"""

import argparse
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from __version__ import __version__
from core.config import PipelineRunSettings
from core.errors import ValidationError
from core.logging import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Queue an Azure DevOps pipeline and publish its results to blob storage",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --storage-account-name st --functions-version 4.0 --devops-user-name me \\
      --organization-name contoso --project-name functions --pipeline-name "Nightly Tests"
  %(prog)s ... --pipeline-definition-id 11 --pipeline-parameters "Flag=true;Label=rc"
        """,
    )

    # Required (may come from environment)
    parser.add_argument("--storage-account-name", help="Storage account for result artifacts")
    parser.add_argument("--storage-account-key", help="Storage account key (or STORAGE_ACCOUNT_KEY)")
    parser.add_argument("--functions-version", help="Version folder in the results container, e.g. 4.0")
    parser.add_argument("--devops-user-name", help="Azure DevOps user name")
    parser.add_argument("--devops-user-pat", help="Azure DevOps personal access token (or DEVOPS_USER_PAT)")
    parser.add_argument("--organization-name", help="Azure DevOps organization")
    parser.add_argument("--project-name", help="Azure DevOps project")

    # Pipeline
    parser.add_argument("--pipeline-name", help="Pipeline name, also the results folder name")
    parser.add_argument("--display-name", help="Label for the pipeline result badge")
    parser.add_argument("--owner", help="Pipeline owner recorded in the results")
    parser.add_argument(
        "--pipeline-definition-id", type=int,
        help="Build definition id (default: 21). Definition 11 also receives "
             "IntegrationBuildNumber=PreRelease{yyMMdd-HHmm}, stamped in UTC",
    )
    parser.add_argument("--source-branch", help="Source branch (default: refs/heads/dev)")
    parser.add_argument(
        "--pipeline-parameters",
        help='Semicolon-separated key=value pairs, e.g. "A=1;Flag=true"',
    )
    parser.add_argument("--pipeline-type", choices=["Build", "Test"], help="Build or Test (default: Build)")

    # Output
    parser.add_argument("--results-dir", help="Local results folder (default: results)")
    parser.add_argument("--log-level", default=os.environ.get("LOG_LEVEL", "INFO"), help="Log level")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    cli_values = {k: v for k, v in vars(args).items() if k != "log_level"}
    try:
        settings = PipelineRunSettings.from_sources(cli_values).validate()
    except ValidationError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    from services.workflow import PipelineWorkflow

    outcome = PipelineWorkflow(settings).run()

    if outcome.result is not None:
        print(outcome.result.to_artifact_json())
    if outcome.error is not None:
        print(f"ERROR: {outcome.error}", file=sys.stderr)
    return outcome.exit_code


if __name__ == "__main__":
    sys.exit(main())
