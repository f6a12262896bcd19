from typing import Annotated
from fastapi import Depends, Request, FastAPI
from . import config
from .ai.replicate import ReplicateClient


def get_app(req: Request) -> FastAPI:
    return req.app


def get_provider(app: FastAPI = Depends(get_app)) -> ReplicateClient:
    return app.state.provider


Provider = Annotated[ReplicateClient, Depends(get_provider)]

Conf = Annotated[config.Config, Depends(config.get_config)]
