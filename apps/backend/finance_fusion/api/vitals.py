from fastapi import APIRouter

from finance_fusion.schemas import Vitals

router = APIRouter(tags=["vitals"])


@router.get("/vitals", response_model=Vitals)
def vitals():
    return {"status": "ok"}
