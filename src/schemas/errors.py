"""Error response schemas for API documentation."""

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Body of every error response.

    Rejected game nights list each broken rule under ``details["errors"]``.
    """

    code: str = Field(examples=["validation_error"])
    message: str = Field(examples=["Game night is not valid"])
    details: dict[
        str, str | int | float | bool | list[str] | list[dict[str, str | int]] | None
    ] = Field(
        default_factory=dict,
        examples=[{"errors": ["Game date is required"]}],
    )


class ErrorResponse(BaseModel):
    """Standard error response wrapper."""

    error: ErrorDetail
