from dataclasses import dataclass
import httpx
from loguru import logger
from pydantic import ValidationError
from ..models import generation

UNREACHABLE = "Failed to reach the image service. Please try again."
UNEXPECTED = "The image service returned an unexpected response."


@dataclass
class Result:
    final_image: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ProxyClient:
    """Post sketches to the proxy endpoint, every outcome end as a Result."""

    def __init__(self, url: str, transport: httpx.BaseTransport | None = None) -> None:
        self._url = url
        self._transport = transport

    def generate(self, image: str, prompt: str) -> Result:
        req = generation.Request(image=image, prompt=prompt)

        try:
            with httpx.Client(timeout=None, transport=self._transport) as client:
                resp = client.post(self._url, json=req.model_dump())
            body = resp.json()
        except httpx.HTTPError as exc:
            logger.error(f"proxy request failed, {repr(exc)}")
            return Result(error=UNREACHABLE)
        except ValueError as exc:
            logger.error(f"proxy response not json, status {resp.status_code}, {repr(exc)}")
            return Result(error=UNREACHABLE)

        if isinstance(body, dict) and "error" in body:
            return Result(error=str(body["error"]))

        if not resp.is_success:
            logger.error(f"proxy response status {resp.status_code}, detail: {resp.text}")
            return Result(error=UNREACHABLE)

        try:
            output = generation.Response.model_validate(body).output
        except ValidationError as exc:
            logger.error(f"proxy response invalid, {repr(exc)}")
            return Result(error=UNEXPECTED)

        # Model produce [intermediate, final].
        if not isinstance(output, list) or len(output) < 2 or not isinstance(output[1], str):
            logger.error(f"unexpected output shape: {output}")
            return Result(error=UNEXPECTED)

        return Result(final_image=output[1])
