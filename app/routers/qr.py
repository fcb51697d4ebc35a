# File: app/routers/qr.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from app.core.security import require_admin
from app.db.session import get_db
from app.schemas.common import ApiResponse
from app.schemas.qr import LocationQROut
from app.services.qr import list_location_qrs

router = APIRouter(prefix="/qr", tags=["qr"])


@router.get("/locations", response_model=ApiResponse[List[LocationQROut]], dependencies=[Depends(require_admin)])
async def list_locations(ward_number: Optional[int] = Query(default=None), db: AsyncSession = Depends(get_db)):
    bindings = await list_location_qrs(db, ward_number=ward_number)
    return ApiResponse(data=[LocationQROut.model_validate(b) for b in bindings])
