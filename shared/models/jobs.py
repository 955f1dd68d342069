"""
Job Models
==========

Submission, queue payload, and result models for the proof pipeline.

Version: 0.1.0
"""

from enum import Enum
from typing import Annotated, Self

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator


# Scores and thresholds travel as unsigned 64-bit integers
UInt64 = Annotated[int, Field(ge=0, le=2**64 - 1)]


class JobStatus(str, Enum):
    """Terminal job states."""

    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class JobRequest(BaseModel):
    """Client submission."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [{"submitter_id": "user-42", "score": 750, "threshold": 700}]
        },
    )

    submitter_id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("submitter_id", "user_id"),
        description="Opaque submitter reference",
    )
    score: UInt64 = Field(..., description="Secret score")
    threshold: UInt64 = Field(..., description="Public threshold")


class JobPayload(BaseModel):
    """Queue message: a request plus its minted job id."""

    job_id: str
    submitter_id: str
    score: UInt64
    threshold: UInt64

    @classmethod
    def from_request(cls, job_id: str, request: JobRequest) -> "JobPayload":
        return cls(
            job_id=job_id,
            submitter_id=request.submitter_id,
            score=request.score,
            threshold=request.threshold,
        )


class JobResult(BaseModel):
    """
    Stored outcome of one job.

    COMPLETED results carry both proof and commitment; FAILED results carry
    neither, only the reason.
    """

    status: JobStatus
    error_message: str | None = None
    proof_b64: str | None = None
    commitment_b64: str | None = None
    protocol_version: int | None = None

    @model_validator(mode="after")
    def check_status_fields(self) -> Self:
        has_artifacts = (self.proof_b64 is not None, self.commitment_b64 is not None)
        if self.status == JobStatus.COMPLETED and not all(has_artifacts):
            raise ValueError("COMPLETED results need proof_b64 and commitment_b64")
        if self.status == JobStatus.FAILED and any(has_artifacts):
            raise ValueError("FAILED results must not carry proof fields")
        return self

    @classmethod
    def completed(
        cls,
        proof_b64: str,
        commitment_b64: str,
        protocol_version: int,
    ) -> "JobResult":
        return cls(
            status=JobStatus.COMPLETED,
            proof_b64=proof_b64,
            commitment_b64=commitment_b64,
            protocol_version=protocol_version,
        )

    @classmethod
    def failed(cls, reason: str) -> "JobResult":
        return cls(status=JobStatus.FAILED, error_message=reason)


class JobAccepted(BaseModel):
    """Response to an accepted submission."""

    job_id: str
