"""
Request payload validation.

Payloads are checked against the create/update schemas and reduced to a
`ValidationResult`. Callers branch on the result instead of catching
exceptions; only the first problem found is reported, worded the way API
clients of this service already expect (`"name" is required`, ...).
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Type

from pydantic import BaseModel, ValidationError

from catalog.models.schemas.product import ProductCreate, ProductUpdate


@dataclass
class ValidationFailure:
    message: str
    path: list
    type: str
    context: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "message": self.message,
            "details": [
                {
                    "message": self.message,
                    "path": self.path,
                    "type": self.type,
                    "context": self.context,
                }
            ],
        }


@dataclass
class ValidationResult:
    value: Optional[Any] = None
    error: Optional[ValidationFailure] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _describe(error: dict) -> ValidationFailure:
    """Translate a single pydantic error into a client-facing failure."""
    path = [str(part) for part in error["loc"]]
    label = ".".join(path) if path else "value"
    context = {"label": label, "key": path[-1] if path else None}
    kind = error["type"]
    ctx = error.get("ctx") or {}

    if kind == "missing":
        return ValidationFailure(f'"{label}" is required', path, "any.required", context)
    if kind == "extra_forbidden":
        return ValidationFailure(f'"{label}" is not allowed', path, "object.unknown", context)
    if kind in ("model_type", "model_attributes_type", "dict_type"):
        return ValidationFailure(f'"{label}" must be of type object', path, "object.base", context)
    if kind == "string_type":
        return ValidationFailure(f'"{label}" must be a string', path, "string.base", context)
    if kind == "string_too_short":
        if error.get("input") == "":
            return ValidationFailure(
                f'"{label}" is not allowed to be empty', path, "string.empty", context
            )
        limit = ctx.get("min_length")
        return ValidationFailure(
            f'"{label}" length must be at least {limit} characters long',
            path,
            "string.min",
            {**context, "limit": limit, "value": error.get("input")},
        )
    if kind == "string_too_long":
        limit = ctx.get("max_length")
        return ValidationFailure(
            f'"{label}" length must be less than or equal to {limit} characters long',
            path,
            "string.max",
            {**context, "limit": limit, "value": error.get("input")},
        )
    if label == "price":
        return ValidationFailure(f'"{label}" must be a number', path, "number.base", context)

    return ValidationFailure(f'"{label}" {error["msg"]}', path, kind, context)


def _validate(schema: Type[BaseModel], payload: Any) -> ValidationResult:
    try:
        schema.model_validate(payload)
    except ValidationError as e:
        return ValidationResult(error=_describe(e.errors()[0]))
    return ValidationResult(value=dict(payload))


def validate_product(payload: Any) -> ValidationResult:
    """Validate a complete product, image path included."""
    return _validate(ProductCreate, payload)


def validate_product_update(payload: Any) -> ValidationResult:
    """Validate an update; the image may be left out."""
    return _validate(ProductUpdate, payload)
