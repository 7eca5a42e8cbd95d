"""Quote submission validation.

Collects every violated rule as a FieldViolation instead of stopping at the
first one. Field-level rules come from the QuoteRequest schema. Cross-field
rules (date order, at least one participant) are checked against the raw
payload as well, so they are reported alongside field errors.

Room capacity is not enforced unless enabled through ``enforce_capacity`` or
the ``ENFORCE_ROOM_CAPACITY`` environment variable.
"""

import os
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from quotation.models import FieldViolation, QuoteRequest, StayCatalog, ValidationResult
from quotation.models.quote import (
    DATE_ORDER_MESSAGE,
    PARTICIPANTS_MESSAGE,
    dates_ordered,
    has_participants,
    parse_iso_date,
)
from quotation.utils.logging import get_logger

logger = get_logger(__name__)

ROOT_FIELD = "__root__"


def _field_path(loc: tuple[int | str, ...]) -> str:
    return ".".join(str(part) for part in loc) if loc else ROOT_FIELD


def violations_from_pydantic(error: ValidationError) -> list[FieldViolation]:
    """Convert schema errors to violations.

    Errors raised by the model-level rule check carry no location; those
    rules are reported by ``cross_field_violations`` instead.
    """
    violations: list[FieldViolation] = []
    for err in error.errors():
        loc = tuple(err.get("loc", ()))
        if not loc and err.get("type") == "value_error":
            continue
        violations.append(
            FieldViolation(
                field=_field_path(loc),
                message=str(err.get("msg", "")),
                type=str(err.get("type", "value_error")),
            )
        )
    return violations


def cross_field_violations(payload: Mapping[str, Any]) -> list[FieldViolation]:
    """Check date order and participant presence on a raw payload.

    Each rule is only evaluated when the fields it depends on are
    individually readable.
    """
    violations: list[FieldViolation] = []

    try:
        check_in = parse_iso_date(payload.get("check_in"))
        check_out = parse_iso_date(payload.get("check_out"))
    except ValueError:
        pass
    else:
        if not dates_ordered(check_in, check_out):
            violations.append(FieldViolation(field="check_in", message=DATE_ORDER_MESSAGE))

    participants = payload.get("participants")
    if isinstance(participants, list) and participants:
        counts = [
            p.get("count")
            for p in participants
            if isinstance(p, Mapping)
        ]
        int_counts = [c for c in counts if isinstance(c, int) and not isinstance(c, bool)]
        if not has_participants(int_counts):
            violations.append(FieldViolation(field="participants", message=PARTICIPANTS_MESSAGE))

    return violations


class QuoteValidator:
    """Validator for quote submissions."""

    def __init__(self, enforce_capacity: bool | None = None) -> None:
        """Initialize the validator.

        Args:
            enforce_capacity: Reject rooms whose occupants exceed capacity.
                Defaults to the ENFORCE_ROOM_CAPACITY env var (false).
        """
        if enforce_capacity is None:
            enforce_capacity = os.getenv("ENFORCE_ROOM_CAPACITY", "false").lower() in (
                "1",
                "true",
                "yes",
            )
        self.enforce_capacity = enforce_capacity

    def validate(self, payload: Any) -> ValidationResult:
        """Validate a raw submission payload.

        Returns:
            ValidationResult with the parsed request, or every violation found.
        """
        if not isinstance(payload, Mapping):
            return ValidationResult(
                violations=[
                    FieldViolation(
                        field=ROOT_FIELD,
                        message="Quote submission must be an object",
                        type="model_type",
                    )
                ]
            )

        try:
            request = QuoteRequest.model_validate(dict(payload))
        except ValidationError as e:
            violations = violations_from_pydantic(e) + cross_field_violations(payload)
            logger.info(
                "Quote submission rejected: %s",
                ", ".join(v.field for v in violations),
                extra={"violation_count": len(violations)},
            )
            return ValidationResult(violations=violations)

        return ValidationResult(request=request)

    def check_capacity(self, request: QuoteRequest, catalog: StayCatalog) -> list[FieldViolation]:
        """Check room occupants against capacity when enforcement is enabled.

        A room line with quantity N may hold up to N x capacity occupants.
        Rooms missing from the catalog are left to the caller.
        """
        if not self.enforce_capacity or not request.rooms:
            return []

        violations: list[FieldViolation] = []
        for index, room_request in enumerate(request.rooms):
            room = catalog.room(room_request.room_id)
            if room is None or not room_request.occupants:
                continue
            occupants = sum(o.count for o in room_request.occupants)
            limit = room.capacity * room_request.quantity
            if occupants > limit:
                violations.append(
                    FieldViolation(
                        field=f"rooms.{index}.occupants",
                        message=f"{occupants} occupants exceed the capacity of {limit} for {room.name}",
                    )
                )
        return violations
