from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from gonext.core.exceptions import ValidationFailure

M = TypeVar("M", bound=BaseModel)


def blank_to_none(value: Any) -> Any:
    """Optional text fields treat empty or whitespace-only input as unset."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def build(model_cls: Type[M], data: dict) -> M:
    """Construct a schema, reporting pydantic errors as ValidationFailure."""
    try:
        return model_cls(**data)
    except ValidationError as exc:
        error = exc.errors()[0]
        field: Optional[str] = ".".join(str(p) for p in error.get("loc", ())) or None
        raise ValidationFailure(error.get("msg", str(exc)), field=field) from exc
