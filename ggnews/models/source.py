"""Source model for RSS feed sources."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import DBModel


class Source(DBModel):
    """RSS feed source model."""

    name: str = Field(..., description="Source name")
    url: str = Field(..., description="RSS feed URL")
    region: Optional[str] = Field(None, description="Region override applied to every article from this source")
    is_active: bool = Field(True, description="Whether the source is polled")
    last_fetched_at: Optional[datetime] = Field(None, description="When the source was last fetched successfully")
