from __future__ import annotations

from typing import Callable, Optional

from loguru import logger

from .batch import BatchReconciler
from .config import Settings
from .console import Console
from .plan import JetAssignError, Passenger, SeatingPlan, SeatLocation, SeatOccupiedError
from .progress import simulate_upload
from .render import render_ascii, render_class_listing, render_passenger, render_report


MAIN_MENU = """\
JetAssign seat assignment
  1. Add an assignment
  2. Delete an assignment
  3. Add assignments in batch
  4. Show latest seating plan
  5. Show details
  6. Quit"""

DETAILS_MENU = """\
Show details
  1. Passenger by passport ID
  2. Passengers by ticket class
  3. Back"""

BATCH_HELP = """\
Enter one assignment per line as "<Name>/<Passport ID>/<Seat Location>", e.g. "Chan Tai Man/HK1234567/10D".
A later line for the same passport ID replaces the earlier one. Enter "0" to finish."""

RETURN_PROMPT = "Press ENTER to return to the main menu..."

QUIT_OPTION = 6
DETAILS_BACK_OPTION = 3


class JetAssignApp:
    """
    The interactive program: owns the seating plan and runs the menu loop.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        settings: Optional[Settings] = None,
        plan: Optional[SeatingPlan] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        self.console = console or Console()
        self.settings = settings or Settings()
        self.plan = plan if plan is not None else SeatingPlan()
        self._sleep = sleep

    def run(self) -> int:
        actions = {
            1: self.add_assignment,
            2: self.delete_assignment,
            3: self.add_assignments_in_batch,
            4: self.show_seating_plan,
            5: self.show_details,
        }
        while True:
            self.console.write(MAIN_MENU)
            selection = self.console.menu_option(QUIT_OPTION)
            if selection == QUIT_OPTION:
                return 0
            self.console.write()
            try:
                actions[selection]()
            except JetAssignError as e:
                logger.warning("option {} failed: {}", selection, e)
                self.console.error(e)
            self.console.write()

    def _upload(self) -> None:
        kwargs = {} if self._sleep is None else {"sleep": self._sleep}
        simulate_upload(
            self.console.stdout,
            steps=self.settings.upload_steps,
            interval=self.settings.upload_interval,
            **kwargs,
        )

    def _move(self, passenger: Passenger, location: SeatLocation) -> None:
        self.plan.remove(passenger)
        self.plan.assign(location, passenger)

    def add_assignment(self) -> None:
        passenger = self.console.passenger()
        current = self.plan.location_of(passenger)
        if current is not None:
            occupant = self.plan.at(current)
            self.console.write(f"{occupant} is already assigned to {current}.")
            move = self.console.confirm(
                "Would you like to move the passenger to another seat?", self.settings.reassign_default
            )
            if not move:
                self.console.write("Cancelled, the assignment was not changed.")
                self.console.wait_for_enter(RETURN_PROMPT)
                return

        while True:
            location = self.console.seat_location()
            if location == current or not self.plan.is_occupied(location):
                break
            self.console.error(f"The seat {location} was already occupied by another passenger.")

        if not self.console.confirm(f"Assign {passenger} to {location}?", self.settings.commit_default):
            self.console.write("Cancelled, no assignment was made.")
            self.console.wait_for_enter(RETURN_PROMPT)
            return

        try:
            self._move(passenger, location)
        except SeatOccupiedError as e:
            self.console.error(e)
            if current is not None and not self.plan.is_assigned(passenger):
                self.plan.assign(current, passenger)
        else:
            self._upload()
            self.console.write(f"Done, {passenger} was assigned to {location}.")
        self.console.wait_for_enter(RETURN_PROMPT)

    def delete_assignment(self) -> None:
        passport_id = self.console.passport_id()
        location = self.plan.location_of(passport_id)
        if location is None:
            self.console.write(f"No seat was assigned to the passport ID {passport_id}.")
            self.console.wait_for_enter(RETURN_PROMPT)
            return

        passenger = self.plan.at(location)
        if self.console.confirm(f"Remove {passenger} from {location}?", self.settings.commit_default):
            self.plan.remove(location)
            self._upload()
            self.console.write(f"Done, {location} is now available.")
        else:
            self.console.write("Cancelled, the assignment was kept.")
        self.console.wait_for_enter(RETURN_PROMPT)

    def add_assignments_in_batch(self) -> None:
        self.console.write(BATCH_HELP)
        requests = self.console.assignment_batch()
        self.console.write()

        if not requests:
            self.console.write("No requests could be committed.")
            self.console.wait_for_enter(RETURN_PROMPT)
            return

        reconciler = BatchReconciler(self.plan, self.console.confirm, reassign_default=self.settings.reassign_default)
        report = reconciler.reconcile(requests)
        self.console.write(render_report(report))
        self.console.write()

        if not report.has_commits:
            self.console.write("No requests could be committed.")
        elif self.console.confirm("Are you sure to commit the requests?", self.settings.commit_default):
            count = reconciler.commit(report)
            self._upload()
            noun = "request was" if count == 1 else "requests were"
            self.console.write(f"Done, {count} {noun} committed.")
        else:
            self.console.write("Cancelled, no requests were committed.")
        self.console.wait_for_enter(RETURN_PROMPT)

    def show_seating_plan(self) -> None:
        chart = render_ascii(self.plan, cell_width=self.settings.cell_width, show_ids=self.settings.show_ids)
        self.console.write(chart)
        self.console.write()
        self.console.wait_for_enter(RETURN_PROMPT)

    def show_details(self) -> None:
        while True:
            self.console.write(DETAILS_MENU)
            selection = self.console.menu_option(DETAILS_BACK_OPTION)
            if selection == DETAILS_BACK_OPTION:
                return
            self.console.write()
            if selection == 1:
                self._show_passenger()
            else:
                self.console.write(render_class_listing(self.plan, self.console.ticket_class()))
            self.console.write()
            self.console.wait_for_enter()

    def _show_passenger(self) -> None:
        passport_id = self.console.passport_id()
        location = self.plan.location_of(passport_id)
        if location is None:
            self.console.write(f"No seat was assigned to the passport ID {passport_id}.")
            return
        self.console.write(render_passenger(self.plan.at(location), location))
