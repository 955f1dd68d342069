"""
Range Proof Verification
========================

Deterministic, side-effect-free verification against public parameters.

Version: 1.0.0
"""

import time

from nacl.exceptions import CryptoError

from shared.logging import get_logger
from shared.zk.generators import bulletproof_gens, pedersen_gens
from shared.zk.models import ZkProof
from shared.zk.params import CURRENT_PROTOCOL, ProtocolParameters
from shared.zk.transcript import Transcript

logger = get_logger(__name__)


class RangeProofVerifier:
    """
    Verifier bound to one protocol parameter set.

    The same parameter set (transcript label, generator derivation and
    count) the prover used must be supplied, otherwise every proof fails.
    """

    def __init__(self, params: ProtocolParameters = CURRENT_PROTOCOL):
        self.params = params

    def verify(self, zk_proof: ZkProof, expected_range_bits: int | None = None) -> bool:
        """
        Check a proof against its commitment.

        Args:
            zk_proof: Proof and commitment
            expected_range_bits: Range width to check (defaults to the protocol's)

        Returns:
            True iff the proof is valid for the commitment and range
        """
        n = self.params.range_bits if expected_range_bits is None else expected_range_bits
        start_time = time.perf_counter()

        try:
            valid = zk_proof.proof.verify_single(
                bulletproof_gens(self.params),
                pedersen_gens(self.params),
                Transcript(self.params.transcript_label),
                zk_proof.commitment,
                n,
            )
        except (ValueError, ZeroDivisionError, CryptoError) as e:
            logger.debug("zk_proof_rejected", error=str(e), error_type=type(e).__name__)
            valid = False

        logger.debug(
            "zk_proof_verified",
            valid=valid,
            protocol_version=self.params.version,
            range_bits=n,
            verification_time_ms=int((time.perf_counter() - start_time) * 1000),
        )
        return valid


def verify(
    zk_proof: ZkProof,
    expected_range_bits: int = 64,
    params: ProtocolParameters = CURRENT_PROTOCOL,
) -> bool:
    """Verify a proof with the given parameter set."""
    return RangeProofVerifier(params).verify(zk_proof, expected_range_bits)
