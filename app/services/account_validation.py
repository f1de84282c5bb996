"""
Account input validation as pure functions.
Challenge: Conditional field rules, named failure reasons, no I/O.
Design: Callers get a ValidationResult instead of an exception; the wire only
ever sees the generic validation_failed code.
"""

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from app.schemas.user import UserRegister, UserUpdate

SchemaType = TypeVar("SchemaType", bound=BaseModel)


@dataclass(frozen=True)
class ValidationResult(Generic[SchemaType]):
    """Either parsed data (ok) or the reasons it was rejected."""

    data: SchemaType | None = None
    reasons: tuple[str, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return self.data is not None and not self.reasons


def _reason(error: dict) -> str:
    """'phone:string_too_short' for field errors, bare rule name for cross-field ones."""
    loc = ".".join(str(part) for part in error.get("loc", ()))
    return f"{loc}:{error['type']}" if loc else error["type"]


def _validate(schema: type[SchemaType], payload: Any) -> ValidationResult[SchemaType]:
    if not isinstance(payload, dict):
        return ValidationResult(reasons=("body:not_an_object",))
    try:
        return ValidationResult(data=schema.model_validate(payload))
    except ValidationError as exc:
        return ValidationResult(reasons=tuple(_reason(e) for e in exc.errors()))


def validate_registration(payload: Any) -> ValidationResult[UserRegister]:
    return _validate(UserRegister, payload)


def validate_update(payload: Any) -> ValidationResult[UserUpdate]:
    return _validate(UserUpdate, payload)
