"""Fetch log model, one row per source per ingestion run."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from .base import DBModel

FetchStatus = Literal["started", "completed", "failed"]


class FetchLog(DBModel):
    """Audit record of a single source fetch."""

    source_id: int = Field(..., description="Foreign key to news_sources")
    status: FetchStatus = Field("started", description="Fetch status")
    articles_found: int = Field(0, description="Items present in the feed")
    articles_new: int = Field(0, description="Articles inserted")
    articles_processed: int = Field(0, description="Items examined")
    error_message: Optional[str] = Field(None, description="Error message if failed")
    started_at: Optional[datetime] = Field(None, description="When the fetch started")
    completed_at: Optional[datetime] = Field(None, description="When the fetch completed or failed")
