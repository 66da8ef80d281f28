from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, Optional

from loguru import logger

from .plan import Passenger, SeatingPlan, SeatLocation


ConfirmFn = Callable[[str, bool], bool]


@dataclass(frozen=True)
class AssignmentRequest:
    passenger: Passenger
    location: SeatLocation

    def is_same_passenger(self, other: "AssignmentRequest") -> bool:
        return self.passenger.passport_id == other.passenger.passport_id

    def __str__(self) -> str:
        return f"{self.passenger.name}/{self.passenger.passport_id}/{self.location}"


class Outcome(str, Enum):
    accepted = "accepted"
    rejected_assigned = "rejected_assigned"
    rejected_occupied = "rejected_occupied"


@dataclass
class BatchReport:
    decisions: list[tuple[AssignmentRequest, Outcome]] = field(default_factory=list)

    def bucket(self, outcome: Outcome) -> list[AssignmentRequest]:
        return [req for req, o in self.decisions if o is outcome]

    @property
    def accepted(self) -> list[AssignmentRequest]:
        return self.bucket(Outcome.accepted)

    @property
    def rejected_assigned(self) -> list[AssignmentRequest]:
        return self.bucket(Outcome.rejected_assigned)

    @property
    def rejected_occupied(self) -> list[AssignmentRequest]:
        return self.bucket(Outcome.rejected_occupied)

    @property
    def has_commits(self) -> bool:
        return any(o is Outcome.accepted for _, o in self.decisions)

    @property
    def has_rejections(self) -> bool:
        return any(o is not Outcome.accepted for _, o in self.decisions)

    def counts(self) -> dict[Outcome, int]:
        return {o: len(self.bucket(o)) for o in Outcome}


def dedupe_requests(requests: Iterable[AssignmentRequest]) -> list[AssignmentRequest]:
    """
    Keep only the last request per passport ID, at the position it was last given.
    """
    out: list[AssignmentRequest] = []
    for req in requests:
        out = [r for r in out if not r.is_same_passenger(req)]
        out.append(req)
    return out


def reassignment_prompt(passenger: Passenger, old: SeatLocation, new: SeatLocation) -> str:
    return (
        f"{passenger.name} ({passenger.passport_id}) was already assigned to {old}, "
        f"would you like to move the passenger to {new} if the seat was available?"
    )


class BatchReconciler:
    """
    Classifies a batch of assignment requests against the live plan and
    against each other, then commits the accepted ones on request.

    Analysis never writes to the plan. Seats touched during a pass are tracked
    in an overlay (location -> occupied) that shadows the plan's answer; the
    overlay lives for one ``reconcile`` call only.
    """

    def __init__(self, plan: SeatingPlan, confirm: ConfirmFn, *, reassign_default: bool = False):
        self.plan = plan
        self.confirm = confirm
        self.reassign_default = reassign_default

    def reconcile(self, requests: Iterable[AssignmentRequest]) -> BatchReport:
        overlay: dict[SeatLocation, bool] = {}

        def projected_occupied(location: SeatLocation) -> bool:
            if location in overlay:
                return overlay[location]
            return self.plan.is_occupied(location)

        report = BatchReport()
        for req in dedupe_requests(requests):
            current: Optional[SeatLocation] = self.plan.location_of(req.passenger)
            if current is not None:
                # Still held until this batch is committed.
                overlay[current] = True
                if not self.confirm(reassignment_prompt(req.passenger, current, req.location), self.reassign_default):
                    outcome = Outcome.rejected_assigned
                elif projected_occupied(req.location) and req.location != current:
                    overlay[req.location] = True
                    outcome = Outcome.rejected_occupied
                else:
                    overlay[current] = False
                    overlay[req.location] = True
                    outcome = Outcome.accepted
            elif projected_occupied(req.location):
                overlay[req.location] = True
                outcome = Outcome.rejected_occupied
            else:
                overlay[req.location] = True
                outcome = Outcome.accepted

            logger.debug("batch request {} -> {}", req, outcome.value)
            report.decisions.append((req, outcome))

        counts = report.counts()
        logger.info(
            "reconciled {} request(s): {} accepted, {} already assigned, {} seat occupied",
            len(report.decisions),
            counts[Outcome.accepted],
            counts[Outcome.rejected_assigned],
            counts[Outcome.rejected_occupied],
        )
        return report

    def commit(self, report: BatchReport) -> int:
        committed = 0
        for req in report.accepted:
            if self.plan.is_assigned(req.passenger):
                self.plan.remove(req.passenger)
            self.plan.assign(req.location, req.passenger)
            committed += 1
        logger.info("committed {} request(s)", committed)
        return committed
