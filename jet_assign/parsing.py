from __future__ import annotations

import re
from typing import Optional

from pydantic import BaseModel, ValidationError, field_validator

from .batch import AssignmentRequest
from .plan import SEAT_PATTERN, JetAssignError, Passenger, SeatLocation, TicketClass


COMPACT_SEPARATOR = "/"

_MENU_OPTION_PATTERN = re.compile(r"\d+")
_PASSPORT_ID_PATTERN = re.compile(r"[0-9A-Za-z]+")


class InvalidInputError(JetAssignError, ValueError):
    pass


class EmptyInputError(InvalidInputError):
    pass


class MalformedInputError(InvalidInputError):
    pass


def _check_name(v: str) -> str:
    v = v.strip()
    if not v:
        raise EmptyInputError("The passenger's name must not be empty.")
    return v


def _check_passport_id(v: str) -> str:
    v = v.strip()
    if not v:
        raise EmptyInputError("The passport ID must not be empty.")
    if not _PASSPORT_ID_PATTERN.fullmatch(v):
        raise MalformedInputError("Only alphanumeric characters were allowed.")
    return v


def _check_seat(v: str) -> str:
    v = v.strip().upper()
    if not v:
        raise EmptyInputError("The seat location must not be empty.")
    if not SEAT_PATTERN.fullmatch(v):
        raise MalformedInputError(
            'The seat location must be formatted as the row (1-13) followed by the column (A-F), e.g. "10D".'
        )
    return v


class PassengerInput(BaseModel):
    name: str
    passport_id: str

    @field_validator("name")
    @classmethod
    def _valid_name(cls, v: str) -> str:
        return _check_name(v)

    @field_validator("passport_id")
    @classmethod
    def _valid_passport_id(cls, v: str) -> str:
        return _check_passport_id(v)

    def to_passenger(self) -> Passenger:
        return Passenger(name=self.name, passport_id=self.passport_id)


class SeatInput(BaseModel):
    seat: str

    @field_validator("seat")
    @classmethod
    def _valid_seat(cls, v: str) -> str:
        return _check_seat(v)

    def to_location(self) -> SeatLocation:
        return SeatLocation.parse(self.seat)


class AssignmentInput(PassengerInput):
    seat: str

    @field_validator("seat")
    @classmethod
    def _valid_seat(cls, v: str) -> str:
        return _check_seat(v)

    def to_request(self) -> AssignmentRequest:
        return AssignmentRequest(self.to_passenger(), SeatLocation.parse(self.seat))


def _input_error(exc: ValidationError) -> InvalidInputError:
    errors = exc.errors()
    for err in errors:
        cause = (err.get("ctx") or {}).get("error")
        if isinstance(cause, InvalidInputError):
            return cause
    msg = errors[0]["msg"] if errors else str(exc)
    return MalformedInputError(msg.removeprefix("Value error, "))


def _validate(model: type[BaseModel], **fields: str) -> BaseModel:
    try:
        return model.model_validate(fields)
    except ValidationError as e:
        raise _input_error(e) from e


def parse_confirmation(text: str, default: Optional[bool] = None) -> bool:
    answer = text.strip()
    if not answer:
        if default is None:
            raise EmptyInputError("Please enter a command.")
        return default
    if answer[0] in "Yy":
        return True
    if answer[0] in "Nn":
        return False
    raise MalformedInputError("Invalid response. Please enter a correct command.")


def parse_menu_option(text: str) -> int:
    selection = text.strip()
    if not selection:
        raise EmptyInputError("The option selection must not be empty.")
    if not _MENU_OPTION_PATTERN.fullmatch(selection):
        raise MalformedInputError("Only numeric characters were allowed.")
    return int(selection)


def parse_passenger_name(text: str) -> str:
    return _check_name(text)


def parse_passport_id(text: str) -> str:
    return _check_passport_id(text)


def parse_seat_location(text: str) -> SeatLocation:
    return _validate(SeatInput, seat=text).to_location()


def parse_passenger(name: str, passport_id: str) -> Passenger:
    return _validate(PassengerInput, name=name, passport_id=passport_id).to_passenger()


def parse_compact_assignment(text: str) -> AssignmentRequest:
    segments = text.strip().split(COMPACT_SEPARATOR)
    if len(segments) != 3:
        raise MalformedInputError(
            'The assignment entry should be formatted as "<Name>/<Passport ID>/<Seat Location>".'
        )
    name, passport_id, seat = segments
    return _validate(AssignmentInput, name=name, passport_id=passport_id, seat=seat).to_request()


def parse_ticket_class(text: str) -> TicketClass:
    choice = text.strip().lower()
    if not choice:
        raise EmptyInputError("The ticket class must not be empty.")
    for i, ticket_class in enumerate(TicketClass, start=1):
        if choice in (str(i), ticket_class.value, ticket_class.value[0]):
            return ticket_class
    raise MalformedInputError("The ticket class must be one of First, Business or Economy (1-3).")
