"""
ZK Data Models
==============

Proof objects, their transport encoding, and verifier-side artifacts.

Version: 1.0.0
"""

import base64
import binascii
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field

from shared.zk.exceptions import ArtifactDecodeError, ProofDecodeError
from shared.zk.group import POINT_BYTES, decode_point
from shared.zk.rangeproof import RangeProof


@dataclass(frozen=True)
class ZkProof:
    """
    A range proof together with the commitment it speaks about.

    Immutable once produced; the commitment is a 32-byte group element.
    """

    proof: RangeProof
    commitment: bytes

    def to_transport(self) -> tuple[str, str]:
        """Encode as (proof_b64, commitment_b64) for JSON transport."""
        return (
            base64.b64encode(self.proof.to_bytes()).decode("ascii"),
            base64.b64encode(self.commitment).decode("ascii"),
        )

    @classmethod
    def from_bytes(cls, proof_bytes: bytes, commitment_bytes: bytes) -> "ZkProof":
        """
        Rebuild from raw bytes.

        Raises:
            ProofDecodeError: If either part is malformed
        """
        if len(commitment_bytes) != POINT_BYTES:
            raise ProofDecodeError(
                f"Commitment must be {POINT_BYTES} bytes, got {len(commitment_bytes)}"
            )
        return cls(
            proof=RangeProof.from_bytes(proof_bytes),
            commitment=decode_point(commitment_bytes),
        )

    @classmethod
    def from_transport(cls, proof_b64: str, commitment_b64: str) -> "ZkProof":
        """
        Rebuild from the base64 transport form.

        Raises:
            ArtifactDecodeError: If the text is not base64 or the bytes are malformed
        """
        try:
            proof_bytes = base64.b64decode(proof_b64, validate=True)
            commitment_bytes = base64.b64decode(commitment_b64, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ArtifactDecodeError(f"Invalid base64: {e}") from e

        try:
            return cls.from_bytes(proof_bytes, commitment_bytes)
        except ProofDecodeError as e:
            raise ArtifactDecodeError(str(e)) from e


class ProofArtifact(BaseModel):
    """
    A published proof result as seen by an independent verifier.

    The public threshold is deliberately absent; the verifier supplies it.
    """

    status: str
    error_message: str | None = None
    proof_b64: str | None = None
    commitment_b64: str | None = None
    protocol_version: int | None = None


class VerificationOutcome(str, Enum):
    """Distinct verifier outcomes."""

    SUCCESS = "SUCCESS"
    NOT_COMPLETED = "NOT_COMPLETED"
    MISSING_FIELDS = "MISSING_FIELDS"
    ARTIFACT_DECODE_ERROR = "ARTIFACT_DECODE_ERROR"
    PROTOCOL_MISMATCH = "PROTOCOL_MISMATCH"
    CRYPTOGRAPHIC_FAILURE = "CRYPTOGRAPHIC_FAILURE"


class VerificationReport(BaseModel):
    """Result of checking a published artifact."""

    outcome: VerificationOutcome
    threshold: int
    protocol_version: int
    detail: str | None = None
    verified_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def valid(self) -> bool:
        return self.outcome == VerificationOutcome.SUCCESS

    @property
    def message(self) -> str:
        """Human-facing statement of the outcome."""
        if self.valid:
            return (
                "SUCCESS: The proof is cryptographically valid. The user's score "
                f"is confirmed to be >= {self.threshold}."
            )
        reasons = {
            VerificationOutcome.NOT_COMPLETED: "The job status was not 'COMPLETED'.",
            VerificationOutcome.MISSING_FIELDS: "Missing proof or commitment in the artifact.",
            VerificationOutcome.ARTIFACT_DECODE_ERROR: "The artifact could not be decoded.",
            VerificationOutcome.PROTOCOL_MISMATCH: "The artifact uses a different protocol version.",
            VerificationOutcome.CRYPTOGRAPHIC_FAILURE: "The proof is invalid!",
        }
        text = f"FAILURE ({self.outcome.value}): {reasons[self.outcome]}"
        if self.detail:
            text = f"{text} {self.detail}"
        return text
