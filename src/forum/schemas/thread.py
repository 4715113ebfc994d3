import uuid
from datetime import datetime
from pydantic import BaseModel
from .base import ORMBase

# Request bodies are decoded by the validation gate, not by a schema, so that
# they are checked only after authentication, existence and ownership. This
# documents the accepted shape in OpenAPI.
THREAD_WRITE_OPENAPI = {
    "requestBody": {
        "content": {
            "application/json": {
                "schema": {
                    "type": "object",
                    "properties": {
                        "title": {"type": "string", "minLength": 1},
                        "body": {"type": "string", "minLength": 1},
                    },
                },
                "example": {"title": "test title", "body": "test body"},
            }
        },
    }
}


class ThreadRead(ORMBase):
    id: int
    title: str
    body: str
    user_id: uuid.UUID
    created_at: datetime
    updated_at: datetime


class ThreadEnvelope(BaseModel):
    thread: ThreadRead


class ThreadList(BaseModel):
    threads: list[ThreadRead]
