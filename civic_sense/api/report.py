from fastapi import APIRouter

from civic_sense.models.report import ReportCreate
from civic_sense.schemas.responses import ReportSubmittedResponseSchema
from civic_sense.services.report import ReportService

router = APIRouter(prefix="/reports", tags=["report"])
report_service = ReportService()


@router.post("", response_model=ReportSubmittedResponseSchema)
async def submit_report(report: ReportCreate) -> ReportSubmittedResponseSchema:
    """Submit a civic issue report.

    Args:
        report: The report, with up to ten photo URLs

    Returns:
        The stored report
    """
    submitted = await report_service.submit_report(report)
    return ReportSubmittedResponseSchema(
        message="Report submitted successfully", report=submitted
    )
