"""
Independent Verifier
====================

Checks a published proof artifact against a public threshold the verifier
chose, using only the artifact and the shared protocol parameters.

The proof shows that the committed value lies in [0, 2^64). It does not
tie that value to score - threshold, so a valid proof means the threshold
held only if the worker that produced it computed honestly.

Version: 0.1.0
"""

import json
from typing import Any

from pydantic import ValidationError

from shared.logging import get_logger
from shared.zk import (
    CURRENT_PROTOCOL,
    ArtifactDecodeError,
    ProofArtifact,
    ProtocolParameters,
    RangeProofVerifier,
    VerificationOutcome,
    VerificationReport,
    ZkProof,
)


logger = get_logger(__name__)

COMPLETED_STATUS = "COMPLETED"


def _report(
    outcome: VerificationOutcome,
    threshold: int,
    params: ProtocolParameters,
    detail: str | None = None,
) -> VerificationReport:
    logger.info(
        "artifact_verified",
        outcome=outcome.value,
        threshold=threshold,
        protocol_version=params.version,
    )
    return VerificationReport(
        outcome=outcome,
        threshold=threshold,
        protocol_version=params.version,
        detail=detail,
    )


def load_artifact(document: str | bytes | dict[str, Any] | ProofArtifact) -> ProofArtifact:
    """
    Parse an artifact from JSON text, a decoded mapping, or a model.

    Raises:
        ArtifactDecodeError: If the document is not an artifact
    """
    if isinstance(document, ProofArtifact):
        return document
    try:
        data = json.loads(document) if isinstance(document, (str, bytes)) else document
        return ProofArtifact.model_validate(data)
    except (json.JSONDecodeError, UnicodeDecodeError, ValidationError) as e:
        raise ArtifactDecodeError(f"Not a proof artifact: {e}") from e


def verify_artifact(
    document: str | bytes | dict[str, Any] | ProofArtifact,
    threshold: int,
    params: ProtocolParameters = CURRENT_PROTOCOL,
) -> VerificationReport:
    """
    Verify a published artifact.

    The threshold comes from the caller, never from the artifact. Checks run
    in order and stop at the first failure: decoding, status, required
    fields, protocol version, proof bytes, and finally the proof itself.

    Args:
        document: Artifact as JSON text, mapping, or ProofArtifact
        threshold: Publicly agreed threshold the proof is claimed against
        params: Protocol parameters shared with the prover

    Returns:
        VerificationReport with a distinct outcome per failure kind
    """
    try:
        artifact = load_artifact(document)
    except ArtifactDecodeError as e:
        return _report(VerificationOutcome.ARTIFACT_DECODE_ERROR, threshold, params, str(e))

    if artifact.status != COMPLETED_STATUS:
        return _report(
            VerificationOutcome.NOT_COMPLETED,
            threshold,
            params,
            artifact.error_message,
        )

    if not artifact.proof_b64 or not artifact.commitment_b64:
        return _report(VerificationOutcome.MISSING_FIELDS, threshold, params)

    if artifact.protocol_version is not None and artifact.protocol_version != params.version:
        return _report(
            VerificationOutcome.PROTOCOL_MISMATCH,
            threshold,
            params,
            f"Artifact is v{artifact.protocol_version}, verifier is v{params.version}.",
        )

    try:
        zk_proof = ZkProof.from_transport(artifact.proof_b64, artifact.commitment_b64)
    except ArtifactDecodeError as e:
        return _report(VerificationOutcome.ARTIFACT_DECODE_ERROR, threshold, params, str(e))

    if not RangeProofVerifier(params).verify(zk_proof):
        return _report(VerificationOutcome.CRYPTOGRAPHIC_FAILURE, threshold, params)

    return _report(VerificationOutcome.SUCCESS, threshold, params)
