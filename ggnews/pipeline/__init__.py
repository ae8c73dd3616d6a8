"""News ingestion pipeline."""

from .coordinator import IngestionCoordinator, IngestionSummary, SourceReport, print_ingestion_summary
from .factory import build_classifier, build_coordinator, build_llm_provider

__all__ = [
    "IngestionCoordinator",
    "IngestionSummary",
    "SourceReport",
    "build_classifier",
    "build_coordinator",
    "build_llm_provider",
    "print_ingestion_summary",
]
