import uuid
from datetime import datetime
from pydantic import EmailStr
from .base import ORMBase

class UserRead(ORMBase):
    id: uuid.UUID
    email: EmailStr
    role: str
    created_at: datetime | None = None
