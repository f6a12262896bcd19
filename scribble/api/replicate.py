from fastapi import APIRouter
from fastapi.responses import JSONResponse
from loguru import logger

from .. import deps, config
from ..models import generation, prediction
from .common import GenerateRoute, error_response


router = APIRouter(route_class=GenerateRoute)


def build_input(req: generation.Request, conf: config.ModelConfig) -> prediction.Input:
    return prediction.Input(
        image=req.image,
        prompt=req.prompt,
        a_prompt=conf.a_prompt,
        n_prompt=conf.n_prompt,
    )


@router.post("/replicate", status_code=201)
async def generate_from_sketch(
    req: generation.Request,
    provider: deps.Provider,
    conf: deps.Conf,
) -> JSONResponse:
    logger.info(f"generate image, prompt: {req.prompt!r}")

    output = await provider.run(conf.model.ref, build_input(req, conf.model))

    if not output:
        logger.error("Something went wrong")
        return error_response()

    logger.info(f"output {output}")
    resp = generation.Response(output=output)
    return JSONResponse(content=resp.model_dump(), status_code=201)
