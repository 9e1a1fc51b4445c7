from typing import Any, Mapping, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def require_positive_int(value: Any, field: str = "quantity") -> int:
    """Reject anything that is not a strictly positive integer (bools included)"""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(
            f"{field} must be a positive integer",
            errors=[{"field": field, "value": repr(value)}],
        )
    if value <= 0:
        raise ValidationError(
            f"{field} must be a positive integer",
            errors=[{"field": field, "value": value}],
        )
    return value


def parse_model(model: Type[ModelT], payload: Any) -> ModelT:
    """
    Validate a request payload into `model`.

    Accepts an instance of the model as-is; mappings go through pydantic and
    its errors are reported as ValidationError.
    """
    if isinstance(payload, model):
        return payload
    if not isinstance(payload, Mapping):
        raise ValidationError(
            f"{model.__name__} payload must be a mapping",
            errors=[{"type": type(payload).__name__}],
        )
    try:
        return model.model_validate(dict(payload))
    except PydanticValidationError as e:
        errors = [
            {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
            for err in e.errors()
        ]
        raise ValidationError(f"Invalid {model.__name__}", errors=errors) from e
