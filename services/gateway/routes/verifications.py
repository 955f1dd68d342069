"""
Verification Job Routes
=======================

API endpoints for submitting proof jobs and polling their results.
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from services.gateway.jobs import StatusEndpoint, SubmissionGateway
from shared.logging import get_logger
from shared.models.common import ErrorResponse
from shared.models.jobs import JobAccepted, JobRequest, JobResult


logger = get_logger(__name__)
router = APIRouter()

NOT_FOUND_MESSAGE = (
    "No result found for this job_id. It may still be processing or the ID is invalid."
)


def get_gateway(request: Request) -> SubmissionGateway:
    """Submission component built at startup."""
    return request.app.state.gateway


def get_status_endpoint(request: Request) -> StatusEndpoint:
    """Status component built at startup."""
    return request.app.state.status_endpoint


# ============================================================================
# Endpoints
# ============================================================================


@router.post(
    "",
    response_model=JobAccepted,
    status_code=status.HTTP_202_ACCEPTED,
    responses={500: {"model": ErrorResponse}},
)
async def submit_verification(
    job_request: JobRequest,
    gateway: SubmissionGateway = Depends(get_gateway),
) -> JobAccepted:
    """
    Submit a score for threshold proving.

    Returns as soon as the job is queued; poll the returned job id for the
    result.
    """
    job_id = await gateway.submit(job_request)
    return JobAccepted(job_id=job_id)


@router.get(
    "/{job_id}",
    response_model=JobResult,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def get_verification(
    job_id: str,
    status_endpoint: StatusEndpoint = Depends(get_status_endpoint),
) -> JobResult | JSONResponse:
    """
    Get a job's result.

    A 404 does not distinguish a job that is still running from an unknown
    or expired id.
    """
    result = await status_endpoint.lookup(job_id)
    if result is None:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=ErrorResponse(error="Not Found", message=NOT_FOUND_MESSAGE).model_dump(),
        )
    return result
