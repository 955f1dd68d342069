"""
ZK Protocol Exceptions
======================

Structured errors for commitment, proof and artifact handling.
"""


class ProofProtocolError(Exception):
    """Base exception for proof protocol errors."""

    pass


class ThresholdNotMetError(ProofProtocolError):
    """The score is below the public threshold, so no proof can exist."""

    def __init__(self, score: int, threshold: int):
        self.score = score
        self.threshold = threshold
        super().__init__(
            f"Condition not met: Score {score} is less than threshold {threshold}."
        )


class ValueOutOfRangeError(ProofProtocolError):
    """The committed value does not fit the proof's bit width."""

    pass


class ProofDecodeError(ProofProtocolError):
    """Proof or commitment bytes are malformed."""

    pass


class ProtocolVersionError(ProofProtocolError):
    """Prover and verifier disagree on the protocol parameter set."""

    pass


class ArtifactDecodeError(ProofProtocolError):
    """A published proof artifact could not be decoded."""

    pass
