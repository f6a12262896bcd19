import asyncio
import uvicorn
from contextlib import asynccontextmanager
from fastapi import FastAPI
from loguru import logger
from . import api, config, dev
from .ai.replicate import ReplicateClient


def make_app(app_conf: config.AppConfig) -> FastAPI:
    conf = config.get_config(app_conf.config_file)

    # Fail before serving anything when credential is missing.
    provider = ReplicateClient(
        api_token=app_conf.require_token(),
        base_url=app_conf.replicate_base_url,
        poll_interval=conf.model.poll_interval,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.provider = provider
        logger.info(f"serving model {conf.model.ref}")
        yield

    app = FastAPI(title="Scribble For Fun", lifespan=lifespan)
    app.dependency_overrides[config.get_config] = lambda: conf
    app.include_router(api.router)

    @app.get("/health")
    async def health_check():
        return {"status": "ok"}

    if app_conf.mode == "dev":
        logger.info("develop mode")
        app.include_router(dev.router)

    return app


async def main(app_conf: config.AppConfig) -> None:
    app = make_app(app_conf)

    srv_conf = uvicorn.Config(app, host=app_conf.api_host, port=app_conf.api_port)
    srv = uvicorn.Server(srv_conf)
    await srv.serve()


def run() -> None:
    try:
        asyncio.run(main(config.AppConfig()))
    except KeyboardInterrupt:
        pass
