"""
Commitment Generators
=====================

Pedersen value/blinding generators and the per-bit Bulletproof vectors.

Both sets are derived deterministically from the labels in a
ProtocolParameters instance, so anyone holding the same parameter version
recomputes exactly the same points.
"""

from dataclasses import dataclass
from functools import lru_cache

from shared.zk.group import BASEPOINT, hash_to_point, multiscalar_mul
from shared.zk.params import ProtocolParameters


@dataclass(frozen=True)
class PedersenGens:
    """Commitment generators: C = value * B + blinding * B_blinding."""

    B: bytes
    B_blinding: bytes

    def commit(self, value: int, blinding: int) -> bytes:
        return multiscalar_mul([value, blinding], [self.B, self.B_blinding])


@dataclass(frozen=True)
class BulletproofGens:
    """
    Vector generators for the range proof.

    Attributes:
        gens_capacity: Generators available per party
        party_capacity: Number of parties the vectors cover
        G_vec: G generators, one tuple per party
        H_vec: H generators, one tuple per party
    """

    gens_capacity: int
    party_capacity: int
    G_vec: tuple[tuple[bytes, ...], ...]
    H_vec: tuple[tuple[bytes, ...], ...]

    def G(self, n: int, party: int = 0) -> list[bytes]:
        return list(self.G_vec[party][:n])

    def H(self, n: int, party: int = 0) -> list[bytes]:
        return list(self.H_vec[party][:n])


@lru_cache(maxsize=8)
def _derive_pedersen(blinding_label: bytes) -> PedersenGens:
    return PedersenGens(B=BASEPOINT, B_blinding=hash_to_point(blinding_label, BASEPOINT))


@lru_cache(maxsize=8)
def _derive_bulletproof(label: bytes, gens_capacity: int, party_capacity: int) -> BulletproofGens:
    G_vec = []
    H_vec = []
    for party in range(party_capacity):
        party_tag = party.to_bytes(4, "little")
        G_vec.append(
            tuple(
                hash_to_point(label, b"G", party_tag, i.to_bytes(4, "little"))
                for i in range(gens_capacity)
            )
        )
        H_vec.append(
            tuple(
                hash_to_point(label, b"H", party_tag, i.to_bytes(4, "little"))
                for i in range(gens_capacity)
            )
        )
    return BulletproofGens(
        gens_capacity=gens_capacity,
        party_capacity=party_capacity,
        G_vec=tuple(G_vec),
        H_vec=tuple(H_vec),
    )


def pedersen_gens(params: ProtocolParameters) -> PedersenGens:
    """Pedersen generators for a parameter set (cached)."""
    return _derive_pedersen(params.blinding_label)


def bulletproof_gens(params: ProtocolParameters) -> BulletproofGens:
    """Bulletproof generators for a parameter set (cached)."""
    return _derive_bulletproof(
        params.generator_label,
        params.generator_count,
        params.party_capacity,
    )
