from fastapi import APIRouter

from changup.schemas.simulate import ROISimRequest, ROISimResponse
from changup.services.roi import simulate_roi

router = APIRouter(prefix="/api/simulate", tags=["simulate"])


@router.post("/roi", response_model=ROISimResponse)
async def roi(req: ROISimRequest):
    return simulate_roi(req)
