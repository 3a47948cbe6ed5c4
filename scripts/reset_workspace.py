#!/usr/bin/env python3
"""Delete every non-admin user and all dependent workspace data.

Irreversible. Run during a maintenance window:

    python scripts/reset_workspace.py --yes
"""

import argparse
import asyncio
import sys

import logfire

from teamdesk.application.usecase.admin import (
    ResetWorkspaceRequest,
    ResetWorkspaceResponse,
    ResetWorkspaceUseCase,
)
from teamdesk.config import Settings
from teamdesk.util.di.container import create_container
from teamdesk.util.observability import configure_logfire


async def run_reset() -> ResetWorkspaceResponse:
    """Run the reset in one request scope (one transaction)."""
    container = create_container(web=False)
    try:
        async with container() as request_container:
            use_case = await request_container.get(ResetWorkspaceUseCase)
            return await use_case.execute(ResetWorkspaceRequest(requested_by="cli"))
    finally:
        await container.close()


def print_report(report: ResetWorkspaceResponse) -> None:
    print(f"Users deleted: {report.users_deleted}")
    for collection, count in report.deleted.items():
        print(f"  {collection:<15} {count}")
    for collection, reason in report.failures.items():
        print(f"  {collection:<15} FAILED: {reason}")


def main() -> int:
    parser = argparse.ArgumentParser(description="Reset the workspace, keeping admins.")
    parser.add_argument(
        "--yes",
        action="store_true",
        help="Confirm that all non-admin data should be deleted",
    )
    args = parser.parse_args()

    if not args.yes:
        print("Refusing to reset without --yes", file=sys.stderr)
        return 2

    settings = Settings()
    configure_logfire(settings, service_name="teamdesk-maintenance")

    try:
        report = asyncio.run(run_reset())
    except Exception as e:
        logfire.error(
            "Workspace reset failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise

    print_report(report)
    return 0 if report.ok else 1


if __name__ == "__main__":
    sys.exit(main())
