"""Centralized FastAPI dependency definitions for the API layer.

Routers should import dependencies from here instead of directly from
their underlying implementation modules. This provides:

* A stable import surface (refactors in lower layers don't ripple up)
* Easier test overrides via ``app.dependency_overrides[deps.get_db]``

``get_current_user`` yields ``User | None``; whether anonymity is acceptable
is decided by the guard pipeline of each operation, not here.
"""

from forum.db.session import get_db
from forum.core.auth import get_current_user

__all__ = ["get_db", "get_current_user"]
