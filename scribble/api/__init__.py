from . import common, replicate
from fastapi import APIRouter

router = APIRouter(prefix="/api")

router.include_router(replicate.router)
