# Import every model so Base.metadata is complete (Alembic, test bootstrap).
from .user import User
from .thread import Thread

__all__ = ["User", "Thread"]
