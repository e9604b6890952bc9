"""Request and response models for the dispatcher."""

import json
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class Method(str, Enum):
    """Request kind."""

    GET = "GET"
    AUTH = "AUTH"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class ResourceCategory(str, Enum):
    """Backend subsystem a request targets."""

    SERVER = "server"
    BALANCER = "balancer"
    STORAGE = "storage"
    CDN = "cdn"


class RequestDescriptor(BaseModel):
    """A single request to dispatch."""

    method: Method
    category: ResourceCategory = ResourceCategory.SERVER
    path: str = Field(..., min_length=1)
    payload: Any = None


class ApiResponse(BaseModel):
    """Raw result of one request."""

    status_code: int
    body: str = ""
    headers: dict[str, str] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """True for 2xx statuses."""
        return 200 <= self.status_code < 300

    def parsed(self) -> Any:
        """Decode the body as JSON, ``None`` for an empty body."""
        if not self.body:
            return None
        return json.loads(self.body)


class BadRequestDetail(BaseModel):
    """Fields of a 400 error body."""

    code: int
    message: str
    details: str = ""


class BadRequestBody(BaseModel):
    """Envelope of a 400 error body."""

    badRequest: BadRequestDetail
