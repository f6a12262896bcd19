from typing import Any, Callable, Coroutine
import httpx
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from loguru import logger
from pydantic import ValidationError
from ..ai.err import ProviderError

GENERIC_ERROR = "Something went wrong"


def error_response(msg: str = GENERIC_ERROR) -> JSONResponse:
    return JSONResponse(content={"error": msg}, status_code=500)


# Custom route class use to turn provider failures into the error envelope.
class GenerateRoute(APIRoute):

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        original_route_handler = super().get_route_handler()

        async def route_handler(req: Request) -> Response:
            try:
                return await original_route_handler(req)

            # Provider reject the request or is unavailable.
            except httpx.HTTPStatusError as exc:
                logger.error(f"provider response status {exc.response.status_code}, detail: {exc.response.text}")
                return error_response()

            # Connection refused, dns failure, etc.
            except httpx.TransportError as exc:
                logger.error(f"provider unreachable, {repr(exc)}")
                return error_response()

            # Prediction failed or canceled on provider side.
            except ProviderError as exc:
                logger.error(f"prediction not succeeded, {exc}")
                return error_response()

            # Provider response body does not look like a prediction.
            except ValidationError as exc:
                logger.error(f"provider response invalid, {repr(exc)}")
                return error_response()

        return route_handler
