from pydantic import BaseModel, ConfigDict

class ORMBase(BaseModel):
    """Response schema built straight from ORM rows (``from_attributes``)."""
    model_config = ConfigDict(from_attributes=True)
