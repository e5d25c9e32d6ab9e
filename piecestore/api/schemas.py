from pydantic import BaseModel, Field


class CacheStats(BaseModel):
    size: int = Field(..., ge=0, description="Pieces currently cached")
    max_size: int = Field(..., gt=0, description="Cache capacity in pieces")
