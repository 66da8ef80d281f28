from __future__ import annotations

import sys
from typing import Callable, Optional, TextIO, TypeVar

from .batch import AssignmentRequest, dedupe_requests
from .parsing import (
    InvalidInputError,
    parse_compact_assignment,
    parse_confirmation,
    parse_menu_option,
    parse_passenger,
    parse_passenger_name,
    parse_passport_id,
    parse_seat_location,
    parse_ticket_class,
)
from .plan import Passenger, SeatLocation, TicketClass


T = TypeVar("T")

BATCH_TERMINATOR = "0"


class Console:
    """
    Line-based terminal prompts. Every ``ask``-style method re-prompts until
    the input parses; EOF on the input stream raises ``EOFError``.
    """

    def __init__(
        self,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ):
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr

    def write(self, text: str = "") -> None:
        print(text, file=self.stdout)

    def error(self, message: object) -> None:
        print(f"    Error: {message}", file=self.stderr)

    def read_line(self, prompt: str = "") -> str:
        self.stdout.write(prompt)
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            raise EOFError
        return line.rstrip("\r\n")

    def ask(self, prompt: str, parse: Callable[[str], T]) -> T:
        while True:
            try:
                return parse(self.read_line(prompt))
            except InvalidInputError as e:
                self.error(e)

    def wait_for_enter(self, message: str = "Press ENTER to continue...") -> None:
        self.read_line(message)

    def confirm(self, message: str, default: Optional[bool] = None) -> bool:
        if default is None:
            choices = "y/n"
        else:
            choices = "Y/n" if default else "y/N"
        return self.ask(f"{message} [{choices}] ", lambda s: parse_confirmation(s, default))

    def menu_option(self, maximum: int, minimum: int = 1) -> int:
        while True:
            selection = self.ask(f"Option ({minimum}-{maximum}): ", parse_menu_option)
            if minimum <= selection <= maximum:
                return selection
            self.error(f"The option selection must between {minimum} and {maximum} (inclusive).")

    def passenger_name(self) -> str:
        return self.ask("Passenger Name: ", parse_passenger_name)

    def passport_id(self) -> str:
        return self.ask("Passport ID: ", parse_passport_id)

    def passenger(self) -> Passenger:
        name = self.passenger_name()
        return parse_passenger(name, self.passport_id())

    def seat_location(self) -> SeatLocation:
        return self.ask("Seat Location: ", parse_seat_location)

    def ticket_class(self) -> TicketClass:
        return self.ask("Ticket Class (1 First, 2 Business, 3 Economy): ", parse_ticket_class)

    def assignment_batch(self) -> list[AssignmentRequest]:
        requests: list[AssignmentRequest] = []
        while True:
            line = self.read_line("> ")
            if line.strip() == BATCH_TERMINATOR:
                return requests
            try:
                request = parse_compact_assignment(line)
            except InvalidInputError as e:
                self.error(e)
                continue
            requests = dedupe_requests([*requests, request])
