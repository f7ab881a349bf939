"""Cache models shared by the HTTP boundary and cache backends."""

from pydantic import BaseModel, Field


class CachedResponse(BaseModel):
    """Rendered relay response kept for repeat GET requests."""

    body: str
    media_type: str
    status_code: int = 200
    headers: dict[str, str] = Field(default_factory=dict)
