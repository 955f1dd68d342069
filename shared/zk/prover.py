"""
Threshold Proof Generation
==========================

Commit to score - threshold and prove the committed value is in [0, 2^64).

Version: 1.0.0
"""

import time

from shared.logging import get_logger
from shared.zk.exceptions import ThresholdNotMetError, ValueOutOfRangeError
from shared.zk.generators import bulletproof_gens, pedersen_gens
from shared.zk.group import random_scalar
from shared.zk.models import ZkProof
from shared.zk.params import CURRENT_PROTOCOL, ProtocolParameters
from shared.zk.rangeproof import RangeProof
from shared.zk.transcript import Transcript


logger = get_logger(__name__)


class ThresholdProver:
    """
    Range-proof generator for score >= threshold claims.

    Usage:
        prover = ThresholdProver()
        zk_proof = prover.prove_threshold(score=750, threshold=700)
        proof_b64, commitment_b64 = zk_proof.to_transport()
    """

    def __init__(self, params: ProtocolParameters = CURRENT_PROTOCOL):
        self.params = params

    def prove_threshold(self, score: int, threshold: int) -> ZkProof:
        """
        Generate a proof that score >= threshold.

        A fresh blinding factor is drawn on every call, so proving the same
        inputs twice yields unrelated commitments.

        Args:
            score: Secret score
            threshold: Public threshold

        Returns:
            ZkProof with the range proof and the commitment to score - threshold

        Raises:
            ThresholdNotMetError: If score < threshold
            ValueOutOfRangeError: If score - threshold does not fit range_bits
        """
        if score < threshold:
            raise ThresholdNotMetError(score, threshold)

        secret_value = score - threshold
        if secret_value >> self.params.range_bits:
            raise ValueOutOfRangeError(
                f"score - threshold does not fit in {self.params.range_bits} bits"
            )

        blinding = random_scalar()
        transcript = Transcript(self.params.transcript_label)

        start_time = time.perf_counter()
        proof, commitment = RangeProof.prove_single(
            bulletproof_gens(self.params),
            pedersen_gens(self.params),
            transcript,
            secret_value,
            blinding,
            self.params.range_bits,
        )
        proving_time_ms = int((time.perf_counter() - start_time) * 1000)

        logger.info(
            "zk_proof_generated",
            protocol_version=self.params.version,
            range_bits=self.params.range_bits,
            proving_time_ms=proving_time_ms,
        )

        return ZkProof(proof=proof, commitment=commitment)


def prove(
    score: int,
    threshold: int,
    params: ProtocolParameters = CURRENT_PROTOCOL,
) -> ZkProof:
    """Generate a threshold proof with the given parameter set."""
    return ThresholdProver(params).prove_threshold(score, threshold)
