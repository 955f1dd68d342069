"""
Protocol Parameters
===================

The public constants prover and verifier must share for proofs to verify.

Changing any field changes which proofs verify, so every change ships as a
new entry in PROTOCOL_VERSIONS and both sides move to it together.

Version: 1.0.0
"""

from dataclasses import dataclass

from shared.zk.exceptions import ProtocolVersionError


@dataclass(frozen=True)
class ProtocolParameters:
    """
    Versioned public parameter set.

    Attributes:
        version: Protocol version number carried next to published proofs
        transcript_label: Fiat-Shamir domain separation label
        generator_label: Seed label for the Bulletproof generator derivation
        blinding_label: Seed label for the Pedersen blinding generator
        generator_count: Number of G/H generators per party
        party_capacity: Number of aggregated parties (always 1 here)
        range_bits: Bit width n of the range [0, 2^n)
    """

    version: int
    transcript_label: bytes
    generator_label: bytes
    blinding_label: bytes
    generator_count: int
    party_capacity: int
    range_bits: int

    def __post_init__(self) -> None:
        if self.range_bits not in (8, 16, 32, 64):
            raise ValueError(f"Unsupported range width: {self.range_bits}")
        if self.generator_count < self.range_bits:
            raise ValueError(
                f"generator_count {self.generator_count} is smaller than "
                f"range_bits {self.range_bits}"
            )
        if self.party_capacity < 1:
            raise ValueError("party_capacity must be at least 1")


PROTOCOL_V1 = ProtocolParameters(
    version=1,
    transcript_label=b"CreditScoreProof.v1",
    generator_label=b"scoreproof.bulletproof-gens.v1",
    blinding_label=b"scoreproof.pedersen-blinding.v1",
    generator_count=64,
    party_capacity=1,
    range_bits=64,
)

CURRENT_PROTOCOL = PROTOCOL_V1

PROTOCOL_VERSIONS: dict[int, ProtocolParameters] = {
    PROTOCOL_V1.version: PROTOCOL_V1,
}


def get_parameters(version: int) -> ProtocolParameters:
    """
    Look up a parameter set by version.

    Raises:
        ProtocolVersionError: If the version is not known to this build
    """
    try:
        return PROTOCOL_VERSIONS[version]
    except KeyError:
        known = ", ".join(str(v) for v in sorted(PROTOCOL_VERSIONS))
        raise ProtocolVersionError(
            f"Unknown protocol version {version} (supported: {known})"
        ) from None
