from enum import StrEnum
from typing import Any
from pydantic import BaseModel


class Status(StrEnum):
    starting = "starting"
    processing = "processing"
    succeeded = "succeeded"
    failed = "failed"
    canceled = "canceled"

    @property
    def terminal(self) -> bool:
        return self in (Status.succeeded, Status.failed, Status.canceled)


# Input object of the controlnet scribble model.
class Input(BaseModel):
    image: Any = None
    prompt: Any = None
    a_prompt: str
    n_prompt: str


class Urls(BaseModel):
    get: str
    cancel: str | None = None


class Prediction(BaseModel):
    id: str
    status: Status
    output: Any = None
    error: str | None = None
    urls: Urls
