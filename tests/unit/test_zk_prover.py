"""
Unit Tests for Threshold Range Proofs
=====================================

Tests for Pedersen commitments, Bulletproofs proving and verification,
and the proof transport encoding.

Version: 1.0.0
"""

import base64
import dataclasses

import pytest

from shared.zk import (
    PROTOCOL_V1,
    ArtifactDecodeError,
    ProofDecodeError,
    ProtocolVersionError,
    RangeProofVerifier,
    ThresholdNotMetError,
    ThresholdProver,
    ValueOutOfRangeError,
    ZkProof,
    get_parameters,
    prove,
    verify,
)
from shared.zk.group import GROUP_ORDER, IDENTITY
from shared.zk.rangeproof import RangeProof


@pytest.fixture(scope="module")
def valid_proof() -> ZkProof:
    """One proof shared by the read-only tests in this module."""
    return prove(score=750, threshold=700)


class TestThresholdProver:
    """Tests for proof generation."""

    def test_prove_and_verify(self, valid_proof: ZkProof):
        """A score above the threshold yields a verifying proof."""
        assert verify(valid_proof) is True

    def test_score_equal_to_threshold(self):
        """Zero margin is inside the range."""
        assert verify(prove(score=700, threshold=700))

    def test_largest_margin(self):
        """score - threshold = 2^64 - 1 is the top of the range."""
        assert verify(prove(score=2**64 - 1, threshold=0))

    def test_threshold_not_met(self):
        """A score below the threshold is refused with the reason."""
        with pytest.raises(ThresholdNotMetError) as exc_info:
            prove(score=650, threshold=700)

        assert exc_info.value.score == 650
        assert exc_info.value.threshold == 700
        assert str(exc_info.value) == "Condition not met: Score 650 is less than threshold 700."

    def test_margin_too_wide(self):
        """A margin that does not fit 64 bits cannot be proven."""
        with pytest.raises(ValueOutOfRangeError):
            prove(score=2**64, threshold=0)

    def test_fresh_blinding_per_proof(self):
        """Proving the same inputs twice gives unrelated commitments."""
        prover = ThresholdProver()

        first = prover.prove_threshold(score=750, threshold=700)
        second = prover.prove_threshold(score=750, threshold=700)

        assert first.commitment != second.commitment
        assert first.proof.to_bytes() != second.proof.to_bytes()


class TestRangeProofVerifier:
    """Tests for verification failures."""

    def test_wrong_commitment(self, valid_proof: ZkProof):
        """A proof does not verify against another proof's commitment."""
        other = prove(score=800, threshold=700)
        swapped = ZkProof(proof=valid_proof.proof, commitment=other.commitment)

        assert verify(swapped) is False

    def test_tampered_scalar(self, valid_proof: ZkProof):
        """Changing t_x breaks the polynomial check."""
        tampered = dataclasses.replace(
            valid_proof.proof,
            t_x=(valid_proof.proof.t_x + 1) % GROUP_ORDER,
        )

        assert verify(ZkProof(proof=tampered, commitment=valid_proof.commitment)) is False

    def test_identity_points_rejected(self, valid_proof: ZkProof):
        """Degenerate A is rejected before any arithmetic."""
        tampered = dataclasses.replace(valid_proof.proof, A=IDENTITY)

        assert verify(ZkProof(proof=tampered, commitment=valid_proof.commitment)) is False

    def test_wrong_range_width(self, valid_proof: ZkProof):
        """A 64-bit proof is not a 32-bit proof."""
        assert verify(valid_proof, expected_range_bits=32) is False

    def test_different_transcript_label(self, valid_proof: ZkProof):
        """Verifying under another domain label fails."""
        params = dataclasses.replace(PROTOCOL_V1, transcript_label=b"SomeOtherProof")

        assert RangeProofVerifier(params).verify(valid_proof) is False

    def test_different_generators(self, valid_proof: ZkProof):
        """Verifying with other generators fails."""
        params = dataclasses.replace(PROTOCOL_V1, generator_label=b"other-gens")

        assert RangeProofVerifier(params).verify(valid_proof) is False

    def test_verification_is_deterministic(self, valid_proof: ZkProof):
        """Repeated verification gives the same answer."""
        results = {verify(valid_proof) for _ in range(3)}

        assert results == {True}


class TestTransportEncoding:
    """Tests for byte and base64 encodings."""

    def test_wire_size(self, valid_proof: ZkProof):
        """64-bit proofs are 7 header elements plus 12 IPP points and 2 scalars."""
        assert len(valid_proof.proof.to_bytes()) == 672
        assert len(valid_proof.commitment) == 32

    def test_transport_preserves_verifiability(self, valid_proof: ZkProof):
        """Decoding the base64 form gives a proof that still verifies."""
        proof_b64, commitment_b64 = valid_proof.to_transport()

        restored = ZkProof.from_transport(proof_b64, commitment_b64)

        assert restored.commitment == valid_proof.commitment
        assert verify(restored)

    def test_truncated_proof(self, valid_proof: ZkProof):
        """Truncated bytes are a decode error, not a crash."""
        data = valid_proof.proof.to_bytes()

        with pytest.raises(ProofDecodeError):
            RangeProof.from_bytes(data[:-32])
        with pytest.raises(ProofDecodeError):
            RangeProof.from_bytes(data[:100])

    def test_non_canonical_scalar(self, valid_proof: ZkProof):
        """Scalars at or above the group order are rejected."""
        data = bytearray(valid_proof.proof.to_bytes())
        data[4 * 32:5 * 32] = b"\xff" * 32

        with pytest.raises(ProofDecodeError):
            RangeProof.from_bytes(bytes(data))

    def test_invalid_base64(self, valid_proof: ZkProof):
        """Non-base64 text is an artifact decode error."""
        _, commitment_b64 = valid_proof.to_transport()

        with pytest.raises(ArtifactDecodeError):
            ZkProof.from_transport("not base64!!", commitment_b64)

    def test_short_commitment(self, valid_proof: ZkProof):
        """A commitment that is not 32 bytes is an artifact decode error."""
        proof_b64, _ = valid_proof.to_transport()

        with pytest.raises(ArtifactDecodeError):
            ZkProof.from_transport(proof_b64, base64.b64encode(b"\x01" * 16).decode())


class TestProtocolParameters:
    """Tests for the versioned parameter registry."""

    def test_known_version(self):
        assert get_parameters(1) is PROTOCOL_V1

    def test_unknown_version(self):
        with pytest.raises(ProtocolVersionError, match="Unknown protocol version 9"):
            get_parameters(9)

    def test_invalid_parameters(self):
        with pytest.raises(ValueError):
            dataclasses.replace(PROTOCOL_V1, generator_count=32)
