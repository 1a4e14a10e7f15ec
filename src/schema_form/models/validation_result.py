"""
Validation result models.

These models represent the output of the form validator.
"""

from typing import Any

from pydantic import BaseModel, Field


class FieldValidationError(BaseModel):
    """Validation error for a specific field."""

    field_path: str = Field(..., description="Submission-style path, e.g. attendees[0].email")
    error_type: str = Field(..., description="Type of validation error")
    message: str = Field(..., description="Human-readable error message")
    received: Any | None = Field(default=None, description="Received value")


class ValidationResult(BaseModel):
    """Result of form validation."""

    is_valid: bool = Field(..., description="Whether the form data is valid")
    errors: list[FieldValidationError] = Field(
        default_factory=list, description="At most one error per field path"
    )
    validated_data: dict[str, Any] | None = Field(
        default=None, description="Coerced data if valid"
    )

    @property
    def error_count(self) -> int:
        """Get the number of validation errors."""
        return len(self.errors)

    def get_field_error(self, field_path: str) -> FieldValidationError | None:
        """Get the error recorded for a field path, if any."""
        for error in self.errors:
            if error.field_path == field_path:
                return error
        return None

    def to_error_dict(self) -> dict[str, str]:
        """Convert errors to the error set: field path -> message."""
        return {error.field_path: error.message for error in self.errors}
