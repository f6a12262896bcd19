import asyncio
from typing import Any
import httpx
from loguru import logger
from ..models.prediction import Input, Prediction
from . import err


def split_model_ref(ref: str) -> tuple[str, str | None]:
    """Split `owner/name:version` into model name and version, version is optional."""
    name, sep, version = ref.partition(":")
    return name, (version if sep else None)


class ReplicateClient:

    def __init__(
        self,
        api_token: str,
        base_url: str = "https://api.replicate.com/v1",
        poll_interval: float = 1.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._token = api_token
        self._base_url = base_url.rstrip("/")
        self._poll_interval = poll_interval
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=None,
            transport=self._transport,
            headers={"Authorization": f"Bearer {self._token}"},
        )

    async def run(self, ref: str, input: Input) -> Any:
        """
        Create a prediction and wait until it finish.

        Return the prediction output, which may be empty.
        Raise PredictionError if the prediction failed or canceled and
        httpx.HTTPStatusError if provider reject any request.
        """
        async with self._client() as client:
            pred = await self._create(client, ref, input)
            pred = await self._wait(client, pred)

        if pred.status != "succeeded":
            raise err.PredictionError(pred.id, pred.status, pred.error)

        return pred.output

    async def _create(self, client: httpx.AsyncClient, ref: str, input: Input) -> Prediction:
        name, version = split_model_ref(ref)
        payload: dict[str, Any] = {"input": input.model_dump(exclude_none=True)}

        if version is None:
            url = f"{self._base_url}/models/{name}/predictions"
        else:
            url = f"{self._base_url}/predictions"
            payload["version"] = version

        resp = (await client.post(url, json=payload)).raise_for_status()
        pred = Prediction.model_validate_json(resp.content)
        logger.info(f"prediction {pred.id} created for model {name}.")
        return pred

    async def _wait(self, client: httpx.AsyncClient, pred: Prediction) -> Prediction:
        while not pred.status.terminal:
            await asyncio.sleep(self._poll_interval)
            resp = (await client.get(pred.urls.get)).raise_for_status()
            pred = Prediction.model_validate_json(resp.content)
            logger.debug(f"prediction {pred.id} status {pred.status}.")

        return pred
