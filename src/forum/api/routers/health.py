from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from forum.api import deps
from forum.services.health import check_db

router = APIRouter(prefix="/health", tags=["health"])

@router.get("/liveness")
async def liveness():
    """Process is up."""
    return {"status": "ok"}

@router.get("/readiness")
async def readiness(session: AsyncSession = Depends(deps.get_db)):
    """Process can reach its database."""
    if await check_db(session):
        return {"status": "ready"}
    return {"status": "degraded"}
