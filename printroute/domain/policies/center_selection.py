"""CenterSelectionPolicy — pick the print center for a new assignment."""

from __future__ import annotations

from dataclasses import dataclass

from printroute.domain.entities.print_center import PrintCenter
from printroute.domain.errors import NoEligibleCenters


@dataclass(frozen=True)
class CenterSelection:
    """Result of the center selection policy."""

    center: PrintCenter
    reason: str


def select_first_center(centers: list[PrintCenter]) -> CenterSelection:
    """Select the first active center of the registry's eligible list.

    No load balancing: every order of a run lands on the same candidate.

    Args:
        centers: eligible centers in registry order.

    Returns:
        CenterSelection with the first active center.

    Raises:
        NoEligibleCenters: if no active center is available.
    """
    active = [c for c in centers if c.is_active]
    if not active:
        raise NoEligibleCenters("No active print centers available")

    chosen = active[0]
    return CenterSelection(
        center=chosen,
        reason=f"First eligible center: {chosen.name}",
    )
