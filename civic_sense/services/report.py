import asyncio
import logging
from datetime import UTC, datetime
from uuid import uuid4

from civic_sense.models.report import Report, ReportCreate
from civic_sense.store import JsonStore

logger = logging.getLogger(__name__)

REPORTS = "reports"


class ReportService:
    """Service for civic issue reports submitted by citizens."""

    async def submit_report(self, report: ReportCreate) -> Report:
        """Store a submitted report.

        Args:
            report: The report data, with photo URLs

        Returns:
            The stored report

        Raises:
            StoreError: If the report could not be stored
            LockTimeoutError: If the reports collection stayed locked too long
        """
        return await asyncio.to_thread(self._submit_report, report)

    def _submit_report(self, report: ReportCreate) -> Report:
        submitted = Report(
            **report.model_dump(), id=str(uuid4()), submitted_at=datetime.now(UTC)
        )
        JsonStore(REPORTS).append(submitted.model_dump(mode="json", by_alias=True))
        logger.info(
            "New report received: %s with %d photo(s)",
            submitted.id,
            len(submitted.photos),
        )
        return submitted
