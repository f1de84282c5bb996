"""User request/response schemas - API contract and validation."""

from typing import Annotated

from email_validator import EmailNotValidError, validate_email
from pydantic import (
    AfterValidator,
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    model_validator,
)
from pydantic_core import PydanticCustomError

from app.core.security import password_problem

PASSWORD_MIN = 8
PASSWORD_MAX = 72
PHONE_MIN = 8
PHONE_MAX = 11


def _check_email(value: str) -> str:
    """Format check only. The address is kept exactly as sent (no domain lowercasing)."""
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as exc:
        raise ValueError(f"value is not a valid email address: {exc}") from exc
    return value


def _check_password(value: str) -> str:
    problem = password_problem(value)
    if problem:
        raise PydanticCustomError(problem, "password cannot be stored as a bcrypt hash")
    return value


Email = Annotated[str, AfterValidator(_check_email)]
Password = Annotated[
    str,
    StringConstraints(min_length=PASSWORD_MIN, max_length=PASSWORD_MAX),
    AfterValidator(_check_password),
]


class UserRegister(BaseModel):
    # Unknown keys are dropped: only listed fields ever reach the model.
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=255)
    email: Email
    phone: str = Field(..., min_length=PHONE_MIN, max_length=PHONE_MAX)
    password: Password
    # "confirmParssword" is what older clients send
    confirm_password: str = Field(
        ...,
        validation_alias=AliasChoices("confirmPassword", "confirmParssword", "confirm_password"),
    )

    @model_validator(mode="after")
    def passwords_match(self) -> "UserRegister":
        if self.confirm_password != self.password:
            raise PydanticCustomError("password_mismatch", "confirmPassword must equal password")
        return self


class UserUpdate(BaseModel):
    """Self-service update. Every field is optional; password fields come as a set."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str | None = Field(None, min_length=1, max_length=255)
    email: Email | None = None
    phone: str | None = Field(None, min_length=PHONE_MIN, max_length=PHONE_MAX)
    old_password: Password | None = Field(None, alias="oldPassword")
    password: Password | None = None
    confirm_password: str | None = Field(None, alias="confirmPassword")
    avatar_id: int | None = Field(None, alias="avatarId")

    @model_validator(mode="after")
    def password_rules(self) -> "UserUpdate":
        if self.old_password and not self.password:
            raise PydanticCustomError("password_required", "oldPassword requires password")
        if self.password:
            if not self.confirm_password:
                raise PydanticCustomError(
                    "confirm_password_required", "password requires confirmPassword"
                )
            if self.confirm_password != self.password:
                raise PydanticCustomError("password_mismatch", "confirmPassword must equal password")
            if not self.old_password:
                raise PydanticCustomError("old_password_required", "password requires oldPassword")
        return self


class UserPublic(BaseModel):
    """Public projection. Never carries credential material."""

    id: int
    name: str
    email: str
    phone: str

    model_config = {"from_attributes": True}


class AvatarResponse(BaseModel):
    id: int
    name: str
    path: str
    url: str

    model_config = {"from_attributes": True}


class UserProfile(UserPublic):
    avatar: AvatarResponse | None = None
