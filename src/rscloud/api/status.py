"""Translate HTTP status codes into typed errors."""

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from ..models.request import ApiResponse, BadRequestBody
from .exceptions import (
    AccessDenied,
    APIError,
    BadRequest,
    NotFound,
    ParseError,
    PayloadTooLarge,
    ServerError,
)

M = TypeVar("M", bound=BaseModel)


def parse_bad_request(body: str) -> BadRequest:
    """Build a BadRequest error from a 400 response body.

    Raises:
        ParseError: If the body is not a ``badRequest`` document
    """
    try:
        err = BadRequestBody.model_validate_json(body or "").badRequest
    except ValidationError as e:
        raise ParseError(f"Unexpected 400 response body: {e.error_count()} validation error(s)")
    return BadRequest(err.code, err.message, err.details)


def raise_for_status(status_code: int, body: str) -> None:
    """Raise the error mapped to a status code.

    401 is not handled here; the dispatcher owns re-authentication. Statuses
    with no mapping return normally and are left to the caller.
    """
    if status_code == 400:
        raise parse_bad_request(body)
    elif status_code == 403:
        raise AccessDenied()
    elif status_code == 404:
        raise NotFound()
    elif status_code == 413:
        raise PayloadTooLarge()
    elif status_code == 500:
        raise ServerError()


def expect_success(response: ApiResponse, action: str) -> Any:
    """Return the decoded body of a 2xx response.

    Args:
        response: Response returned by the dispatcher
        action: What was attempted, for error messages

    Raises:
        APIError: If the status is not 2xx
        ParseError: If the body is not JSON
    """
    if not response.ok:
        raise APIError(f"Failed to {action}: HTTP {response.status_code}", response.status_code)
    try:
        return response.parsed()
    except ValueError:
        raise ParseError(f"Failed to {action}: response is not JSON")


def expect_model(response: ApiResponse, action: str, key: str, model: type[M]) -> M:
    """Decode the ``key`` object of a 2xx response into ``model``.

    Raises:
        APIError: If the status is not 2xx
        ParseError: If the body lacks ``key`` or does not fit the model
    """
    data = expect_success(response, action)
    try:
        return model.model_validate(data[key])
    except (KeyError, TypeError, ValidationError) as e:
        raise ParseError(f"Failed to {action}: unexpected response document ({e})")


def expect_models(response: ApiResponse, action: str, key: str, model: type[M]) -> list[M]:
    """Decode the ``key`` list of a 2xx response. An empty body is an empty list."""
    data = expect_success(response, action) or {}
    try:
        return [model.model_validate(item) for item in data.get(key) or []]
    except (AttributeError, TypeError, ValidationError) as e:
        raise ParseError(f"Failed to {action}: unexpected response document ({e})")
