"""Operator command line for the assignment engine.

Usage:
    python -m printroute.tools.admin assign
    python -m printroute.tools.admin reassign --center-id 2
    python -m printroute.tools.admin normalize-coordinates
    python -m printroute.tools.admin check [--status PENDING] [--center-id 2]
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from printroute.adapters.persistence.database import async_session_factory, engine
from printroute.adapters.persistence.repositories import SqlAssignmentRepository, commit
from printroute.application.use_cases.inspect_assignments import MAX_PAGE_SIZE
from printroute.domain.errors import FulfillmentError
from printroute.domain.value_objects.enums import AssignmentStatus
from printroute.infrastructure.api.dependencies import (
    build_assign_uc,
    build_normalizer,
    build_reassign_uc,
)

logger = logging.getLogger(__name__)


async def cmd_assign(session: AsyncSession, args: argparse.Namespace) -> int:
    report = await build_assign_uc(session).execute()
    await commit(session)
    if report.no_eligible_centers:
        print("No active print centers found; nothing assigned")
        return 0
    print(
        f"Created {len(report.created)}, skipped {len(report.skipped)}, "
        f"failed {len(report.failures)}"
    )
    for a in report.created:
        print(f"  + order {a.order_id} -> center {a.print_center_id} (assignment {a.id})")
    for f in report.failures:
        print(f"  ! order {f.key}: {f.reason}")
    return 1 if report.failures else 0


async def cmd_reassign(session: AsyncSession, args: argparse.Namespace) -> int:
    count = await build_reassign_uc(session).execute(args.center_id)
    await commit(session)
    print(f"Updated {count} assignment(s) to print center {args.center_id}")
    return 0


async def cmd_normalize(session: AsyncSession, args: argparse.Namespace) -> int:
    report = await build_normalizer(session).execute()
    await commit(session)
    print(
        f"Scanned {report.scanned}, updated {report.updated} "
        f"({report.geocoded} geocoded), skipped {report.skipped}, failed {len(report.failed)}"
    )
    for f in report.failed:
        print(f"  ! order {f.key}: {f.reason}")
    return 1 if report.failed else 0


async def cmd_check(session: AsyncSession, args: argparse.Namespace) -> int:
    repo = SqlAssignmentRepository(session)
    status = AssignmentStatus(args.status) if args.status else None
    offset = 0
    total = None
    while total is None or offset < total:
        items, total = await repo.list_details(
            status=status,
            print_center_id=args.center_id,
            offset=offset,
            limit=MAX_PAGE_SIZE,
        )
        if offset == 0:
            print(f"Found {total} assignment(s)")
        if not items:
            break
        for d in items:
            a = d.assignment
            print(f"- {a.id}: order {a.order_id} -> {d.print_center_name} ({a.status.value})")
        offset += len(items)
    return 0


COMMANDS: dict[str, Callable[[AsyncSession, argparse.Namespace], Awaitable[int]]] = {
    "assign": cmd_assign,
    "reassign": cmd_reassign,
    "normalize-coordinates": cmd_normalize,
    "check": cmd_check,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="PrintRoute operator tools")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("assign", help="Assign unassigned PAID orders")

    reassign = sub.add_parser("reassign", help="Move ALL assignments to one print center")
    reassign.add_argument("--center-id", type=int, required=True)

    sub.add_parser("normalize-coordinates", help="Fill in missing order coordinates")

    check = sub.add_parser("check", help="List assignments")
    check.add_argument("--status", choices=[s.value for s in AssignmentStatus])
    check.add_argument("--center-id", type=int, default=None)
    return parser


async def run(
    args: argparse.Namespace,
    session_factory: async_sessionmaker[AsyncSession] = async_session_factory,
) -> int:
    """Run one command inside one scoped session."""
    async with session_factory() as session:
        try:
            return await COMMANDS[args.command](session, args)
        except FulfillmentError as e:
            await session.rollback()
            logger.error("%s failed: %s", args.command, e)
            return 2


async def _main(argv: list[str] | None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return await run(args)
    finally:
        await engine.dispose()


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")
    return asyncio.run(_main(argv))


if __name__ == "__main__":
    sys.exit(main())
