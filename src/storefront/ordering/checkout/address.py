"""Structural validation of the shipping address entered at checkout."""

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator
from protean.exceptions import ValidationError


class AddressForm(BaseModel):
    street: str = Field(min_length=3, max_length=255)
    number: str = Field(min_length=1, max_length=20)
    complement: str | None = Field(None, max_length=255)
    neighborhood: str = Field(min_length=2, max_length=100)
    city: str = Field(min_length=2, max_length=100)
    state: str = Field(min_length=2, max_length=2)
    zip_code: str = Field(pattern=r"^\d{5}-?\d{3}$")

    @field_validator("street", "number", "neighborhood", "city", "state", "zip_code", mode="before")
    @classmethod
    def strip_whitespace(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("complement", mode="before")
    @classmethod
    def blank_complement_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("state")
    @classmethod
    def state_must_be_letters(cls, value):
        if not value.isalpha():
            raise ValueError("State must be a two-letter code")
        return value.upper()


def _field_errors(exc: PydanticValidationError) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "address"
        errors.setdefault(field, []).append(error["msg"])
    return errors


def validate_address(data: dict | None) -> dict:
    """Return the cleaned address, or raise a ValidationError keyed by field."""
    try:
        form = AddressForm.model_validate(data or {})
    except PydanticValidationError as exc:
        raise ValidationError(_field_errors(exc)) from None
    return form.model_dump()
