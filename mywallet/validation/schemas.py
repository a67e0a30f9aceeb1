"""Mini README: Request schemas and the helpers that apply them.

Structure:
    * SignUpRequest, LoginRequest - account payloads.
    * EntryCreateRequest, EntryUpdateRequest - ledger payloads.
    * SCHEMAS - the named schemas accepted by ``validate_payload``.
    * validate_payload - check a raw payload, collecting every field error.
    * sanitize_payload - run the sanitizer over every text field afterwards.
    * parse_bearer_token - check the ``Authorization`` header shape.

Validation always reports the complete list of problems so clients can fix a
form in one round trip. Sanitizing happens only after validation succeeds, so
error messages refer to what the client actually sent.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Literal, Optional, Type, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationError, field_validator, model_validator

from ..errors import MissingTokenError, RequestValidationFailed
from ..finance import EntryKind
from ..utils.sanitizer import clean

PASSWORD_PATTERN = r"^[a-zA-Z0-9!@#$%&*]{3,30}$"
MAX_AMOUNT = Decimal("1000000000000")

PayloadT = TypeVar("PayloadT", bound=BaseModel)


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


class SignUpRequest(BaseModel):
    """Payload for ``POST /sign-up``."""

    name: str = Field(..., min_length=1, max_length=20)
    email: EmailStr
    password: str = Field(..., pattern=PASSWORD_PATTERN)
    repeat_password: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def trim_name(cls, value: Any) -> Any:
        return _strip(value)

    @model_validator(mode="after")
    def passwords_match(self) -> "SignUpRequest":
        if self.repeat_password is not None and self.repeat_password != self.password:
            raise ValueError("repeat_password must match password")
        return self


class LoginRequest(BaseModel):
    """Payload for ``POST /sign-in``."""

    email: EmailStr
    password: str = Field(..., pattern=PASSWORD_PATTERN)


class EntryCreateRequest(BaseModel):
    """Payload for ``POST /wallet``."""

    model_config = ConfigDict(populate_by_name=True)

    kind: Literal["input", "output", "income", "expense"] = Field(..., alias="type")
    amount: Decimal = Field(..., alias="value", ge=0, lt=MAX_AMOUNT)
    description: str = Field(..., min_length=3)

    @field_validator("description", mode="before")
    @classmethod
    def trim_description(cls, value: Any) -> Any:
        return _strip(value)

    @property
    def entry_kind(self) -> EntryKind:
        return EntryKind.from_wire(self.kind)


class EntryUpdateRequest(BaseModel):
    """Payload for ``PUT /wallet/{id}``; kind and owner are not accepted."""

    model_config = ConfigDict(populate_by_name=True)

    amount: Decimal = Field(..., alias="value", ge=0, lt=MAX_AMOUNT)
    description: str = Field(..., min_length=3)

    @field_validator("description", mode="before")
    @classmethod
    def trim_description(cls, value: Any) -> Any:
        return _strip(value)


SCHEMAS: Dict[str, Type[BaseModel]] = {
    "signup": SignUpRequest,
    "login": LoginRequest,
    "entry_create": EntryCreateRequest,
    "entry_update": EntryUpdateRequest,
}


def format_errors(errors: List[Dict[str, Any]]) -> List[str]:
    """Turn pydantic error dictionaries into ``field: message`` strings."""

    messages: List[str] = []
    for error in errors:
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "is invalid")
        messages.append(f"{location}: {message}" if location else message)
    return messages


def validate_payload(schema: str, payload: Any) -> BaseModel:
    """Validate ``payload`` against the named schema.

    Raises ``RequestValidationFailed`` listing every failing field, in the
    order the schema declares them.
    """

    try:
        model = SCHEMAS[schema]
    except KeyError as error:
        raise KeyError(f"Unknown schema '{schema}'") from error
    try:
        return model.model_validate(payload)
    except ValidationError as error:
        raise RequestValidationFailed(format_errors(error.errors())) from error


def sanitize_payload(payload: PayloadT) -> PayloadT:
    """Return a copy of ``payload`` with markup stripped from every text field.

    The cleaned values are checked against the same schema again, so a field
    that consisted only of markup (``"<b></b>"``) is rejected with
    ``RequestValidationFailed`` instead of being stored empty.
    """

    model = type(payload)
    data = payload.model_dump(by_alias=True)
    for name, field in model.model_fields.items():
        value = getattr(payload, name)
        if isinstance(value, str):
            data[field.alias or name] = clean(value)
    try:
        return model.model_validate(data)
    except ValidationError as error:
        raise RequestValidationFailed(format_errors(error.errors())) from error


def parse_bearer_token(authorization: Optional[str]) -> str:
    """Extract the session token from an ``Authorization`` header.

    An absent header raises ``MissingTokenError``. A header that is present
    but is not ``Bearer <uuid>`` with a version 4 or 5 UUID raises
    ``RequestValidationFailed``. The token is returned in canonical form.
    """

    if not authorization:
        raise MissingTokenError("Authorization header is required")
    scheme, _, credentials = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        raise RequestValidationFailed(["authorization: must use the Bearer scheme"])
    try:
        token = UUID(credentials.strip())
    except ValueError as error:
        raise RequestValidationFailed(["token: must be a valid GUID"]) from error
    if token.version not in (4, 5):
        raise RequestValidationFailed(["token: must be a valid GUID"])
    return str(token)
