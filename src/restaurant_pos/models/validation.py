"""Boundary validation helpers.

Typed input is validated by the pydantic models themselves; these helpers
translate pydantic failures into the engine's own ``ValidationError`` so
callers only ever handle one error taxonomy.
"""

from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from restaurant_pos.errors import ValidationError

M = TypeVar("M", bound=BaseModel)


def build_model(model_cls: type[M], **data: Any) -> M:
    """Instantiate a model, raising the domain ``ValidationError`` on bad input.

    Args:
        model_cls: Pydantic model class to build
        **data: Field values

    Returns:
        The validated model instance

    Raises:
        ValidationError: If any field fails validation
    """
    try:
        return model_cls(**data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or None
        raise ValidationError(
            f"Invalid {model_cls.__name__}: {field or 'value'}: {first['msg']}", field=field
        ) from e


def require_text(value: str, field_name: str) -> str:
    """Strip a required text field and reject it if blank.

    Raises:
        ValueError: If the value is empty after stripping
    """
    stripped = value.strip()
    if not stripped:
        raise ValueError(f"{field_name} is required")
    return stripped
