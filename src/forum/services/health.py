import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

async def check_db(session: AsyncSession) -> bool:
    """Run ``SELECT 1`` and report whether the database answered."""
    try:
        await session.execute(text("SELECT 1"))
        return True
    except (SQLAlchemyError, OSError) as e:
        logger.warning("database readiness check failed", extra={"error": str(e)})
        return False
