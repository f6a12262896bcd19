from secrets import token_hex
from fastapi import APIRouter, HTTPException, Request
from .models.prediction import Prediction, Status, Urls

# Fake replicate API for dev, point REPLICATE_BASE_URL to
# http://localhost:8000/dev/replicate/v1 to use it.
router = APIRouter(prefix="/dev/replicate/v1")

predictions: dict[str, Prediction] = {}


@router.post("/predictions", status_code=201)
async def create_prediction(req: Request) -> Prediction:
    body = await req.json()
    image = body["input"].get("image", "")

    pid = token_hex(8)
    pred = Prediction(
        id=pid,
        status=Status.starting,
        urls=Urls(get=str(req.url_for("get_prediction", pid=pid))),
    )
    # Echo the sketch as both intermediate and final image.
    predictions[pid] = pred.model_copy(
        update={"status": Status.succeeded, "output": [image, image]}
    )
    return pred


@router.get("/predictions/{pid}")
async def get_prediction(pid: str) -> Prediction:
    if pid not in predictions:
        raise HTTPException(status_code=404, detail="no such prediction.")
    return predictions.pop(pid)
