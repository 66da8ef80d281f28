from __future__ import annotations

from typing import Iterable, Optional

from .batch import AssignmentRequest, BatchReport, Outcome
from .plan import COLUMN_COUNT, ROW_COUNT, Passenger, SeatingPlan, SeatLocation, TicketClass


OCCUPIED_MARK = "X"
FREE_MARK = "."
AISLE_AFTER_COLUMN = 2


def _cell(text: Optional[str], width: int) -> str:
    if not text:
        return FREE_MARK.center(width)
    t = str(text)
    if len(t) > width:
        t = t[: max(0, width - 1)] + "…"
    return t.center(width)


def _join_row(cells: list[str], width: int) -> str:
    left = " ".join(cells[: AISLE_AFTER_COLUMN + 1])
    right = " ".join(cells[AISLE_AFTER_COLUMN + 1 :])
    return left + " " * (width + 2) + right


def render_ascii(plan: SeatingPlan, *, cell_width: int = 3, show_ids: bool = False) -> str:
    cell_width = max(3 if show_ids else 1, int(cell_width))
    label_width = len(str(ROW_COUNT)) + 2

    columns = [SeatLocation(0, c).column_label.center(cell_width) for c in range(COLUMN_COUNT)]
    lines = [" " * label_width + _join_row(columns, cell_width)]
    for r in range(ROW_COUNT):
        cells = []
        for c in range(COLUMN_COUNT):
            occupant = plan.at(SeatLocation(r, c))
            if occupant is None:
                cells.append(_cell(None, cell_width))
            else:
                cells.append(_cell(occupant.passport_id if show_ids else OCCUPIED_MARK, cell_width))
        line = str(r + 1).ljust(label_width) + _join_row(cells, cell_width)
        ticket_class = TicketClass.for_row(r)
        if ticket_class.rows.start == r:
            line += f"   {ticket_class.label}"
        lines.append(line.rstrip())

    lines.append("")
    lines.append(f"Occupied: {plan.occupied_count()}    Available: {plan.available_count()}")
    return "\n".join(lines)


def render_requests(requests: Iterable[AssignmentRequest], *, depth: int = 0) -> str:
    return "\n".join(f"{'  ' * depth}- {req}" for req in requests)


def render_report(report: BatchReport) -> str:
    counts = report.counts()
    accepted = counts[Outcome.accepted]
    assigned = counts[Outcome.rejected_assigned]
    occupied = counts[Outcome.rejected_occupied]

    blocks = []
    if accepted:
        blocks.append(f"These requests will be committed ({accepted}):\n" + render_requests(report.accepted))

    if assigned or occupied:
        lines = [f"These requests will be dropped ({assigned + occupied}):"]
        if assigned:
            lines.append(f"- Already assigned ({assigned}):")
            lines.append(render_requests(report.rejected_assigned, depth=1))
        if occupied:
            lines.append(f"- Seat was occupied ({occupied}):")
            lines.append(render_requests(report.rejected_occupied, depth=1))
        blocks.append("\n".join(lines))

    return "\n\n".join(blocks)


def render_passenger(passenger: Passenger, location: SeatLocation) -> str:
    return (
        f"Name:        {passenger.name}\n"
        f"Passport ID: {passenger.passport_id}\n"
        f"Seat:        {location}\n"
        f"Class:       {location.ticket_class.label}"
    )


def render_class_listing(plan: SeatingPlan, ticket_class: TicketClass) -> str:
    seated = plan.passengers_in(ticket_class)
    first, last = ticket_class.rows.start + 1, ticket_class.rows.stop
    header = f"{ticket_class.label} class (rows {first}-{last}): {len(seated)} passenger(s)"
    if not seated:
        return header
    return header + "\n" + "\n".join(f"  {loc!s:<4} {p}" for loc, p in seated)
