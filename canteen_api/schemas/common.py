"""
Canteen API — Shared Schema Building Blocks
============================================

What:  The response envelope, the camelCase model base, the URL field type
       and the partial-update helper shared by both resources.
Why:   Every endpoint answers with the same envelope; both resources accept
       camelCase JSON and validate URLs the same way.

Envelope:
    {
        "status": true,
        "statusCode": 200,
        "message": "...",   (optional)
        "count": 3,          (optional)
        "data": [...]        (optional)
    }
    Optional keys are omitted, not null: routes serialize with
    `response_model_exclude_unset=True` and the exception handlers dump with
    `exclude_unset=True`.
"""

from typing import Annotated, Any, ClassVar, Dict, FrozenSet, List, Optional

from fastapi.responses import JSONResponse
from pydantic import AfterValidator, AnyUrl, BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

_any_url = TypeAdapter(AnyUrl)


def _check_url(value: str) -> str:
    """Validates an absolute URL but keeps the caller's exact string."""
    try:
        _any_url.validate_python(value)
    except PydanticValidationError:
        raise ValueError("must be a valid URL") from None
    return value


# Stored verbatim; pydantic's Url type would normalize (e.g. add a trailing
# slash), which breaks create → list round trips.
UrlStr = Annotated[str, Field(min_length=1), AfterValidator(_check_url)]

# Path/body identifier bounds
EntityId = Annotated[str, Field(min_length=1, max_length=100)]


class CamelModel(BaseModel):
    """Base for request/response bodies: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PartialUpdate(CamelModel):
    """
    Base for update bodies.

    Convention for every field except `id`:
        omitted                    → column untouched
        null, nullable column      → column cleared
        null, NOT NULL column      → column untouched
    `model_fields_set` is the marker that tells omitted and null apart.
    """

    # Fields whose column accepts NULL; subclasses override
    nullable_fields: ClassVar[FrozenSet[str]] = frozenset()

    def changes(self) -> Dict[str, Any]:
        """Column → new value for exactly the fields this update should write."""
        values: Dict[str, Any] = {}
        for name in self.model_fields_set:
            if name == "id":
                continue
            value = getattr(self, name)
            if value is None and name not in self.nullable_fields:
                continue
            values[name] = value
        return values


class ApiResponse(CamelModel):
    """The envelope returned by every resource endpoint."""

    status: bool = Field(description="true on success, false otherwise")
    status_code: int = Field(description="HTTP status code, mirrored in the body")
    message: Optional[str] = Field(default=None, description="Human-readable outcome")
    count: Optional[int] = Field(default=None, description="Number of items in `data` for listings")
    data: Optional[Any] = Field(default=None, description="Resource row(s)")


def error_response(status_code: int, message: str) -> JSONResponse:
    """Failure envelope `{status:false, statusCode, message}` as a JSONResponse."""
    body = ApiResponse(status=False, status_code=status_code, message=message)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_unset=True),
    )


class ValidationErrorResponse(ApiResponse):
    """400 envelope with the validator's field-level errors."""

    errors: List[Dict[str, Any]] = Field(default_factory=list)


class HealthResponse(CamelModel):
    """
    Health check response.

    A backend that cannot reach its database cannot serve any endpoint, so
    the database probe decides the overall status.
    """

    status: str = Field(description="healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="connected or disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
