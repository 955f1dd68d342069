"""
ZK Range Proof Module
=====================

Pedersen commitments and Bulletproofs range proofs over the edwards25519
prime-order subgroup.

Usage:
    from shared.zk import prove, verify

    zk_proof = prove(score=750, threshold=700)
    assert verify(zk_proof)

    proof_b64, commitment_b64 = zk_proof.to_transport()

Version: 1.0.0
"""

from shared.zk.exceptions import (
    ArtifactDecodeError,
    ProofDecodeError,
    ProofProtocolError,
    ProtocolVersionError,
    ThresholdNotMetError,
    ValueOutOfRangeError,
)
from shared.zk.models import (
    ProofArtifact,
    VerificationOutcome,
    VerificationReport,
    ZkProof,
)
from shared.zk.params import (
    CURRENT_PROTOCOL,
    PROTOCOL_V1,
    PROTOCOL_VERSIONS,
    ProtocolParameters,
    get_parameters,
)
from shared.zk.prover import ThresholdProver, prove
from shared.zk.verifier import RangeProofVerifier, verify


__all__ = [
    # Prover
    "ThresholdProver",
    "prove",
    # Verifier
    "RangeProofVerifier",
    "verify",
    # Parameters
    "ProtocolParameters",
    "PROTOCOL_V1",
    "CURRENT_PROTOCOL",
    "PROTOCOL_VERSIONS",
    "get_parameters",
    # Models
    "ZkProof",
    "ProofArtifact",
    "VerificationOutcome",
    "VerificationReport",
    # Errors
    "ProofProtocolError",
    "ThresholdNotMetError",
    "ValueOutOfRangeError",
    "ProofDecodeError",
    "ProtocolVersionError",
    "ArtifactDecodeError",
]
