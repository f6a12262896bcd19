from pydantic import BaseModel
from typing import Any


# Body posted by the sketch page, fields are forwarded as is.
class Request(BaseModel):
    image: Any = None
    prompt: Any = None


class Response(BaseModel):
    output: Any


class ErrorResponse(BaseModel):
    error: str
