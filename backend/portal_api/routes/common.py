from typing import Any, Dict, Type, TypeVar

from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_body(model: Type[ModelT], body: Dict[str, Any]) -> ModelT:
    """Validate a raw JSON body once the handler knows the target record exists.

    Errors are reported exactly like FastAPI's own body validation.
    """
    try:
        return model.model_validate(body)
    except ValidationError as e:
        errors = [dict(err, loc=("body", *err["loc"])) for err in e.errors(include_url=False)]
        raise RequestValidationError(errors)
