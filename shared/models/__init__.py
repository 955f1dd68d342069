"""
Shared Models
=============

Pydantic models shared across scoreproof services.

Models:
- Job models (JobRequest, JobPayload, JobResult, JobAccepted)
- Common models (ErrorResponse, HealthResponse)
"""

from shared.models.common import (
    ErrorResponse,
    HealthResponse,
)
from shared.models.jobs import (
    JobAccepted,
    JobPayload,
    JobRequest,
    JobResult,
    JobStatus,
)

__all__ = [
    # Jobs
    "JobStatus",
    "JobRequest",
    "JobPayload",
    "JobResult",
    "JobAccepted",
    # Common
    "ErrorResponse",
    "HealthResponse",
]
