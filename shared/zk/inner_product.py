"""
Inner Product Argument
======================

Logarithmic-size proof that P = <a, G> + <b, H> + <a, b> * Q for vectors
a, b known to the prover. Each round halves the vectors and publishes one
(L, R) pair; the final proof carries the two remaining scalars.
"""

from dataclasses import dataclass

from shared.zk.exceptions import ProofDecodeError
from shared.zk.group import (
    GROUP_ORDER,
    SCALAR_BYTES,
    decode_point,
    inner_product,
    invert,
    multiscalar_mul,
    scalar_from_bytes,
    scalar_to_bytes,
)
from shared.zk.transcript import Transcript

# log2 of the largest vector we ever fold
MAX_ROUNDS = 32


@dataclass(frozen=True)
class InnerProductProof:
    """Folding rounds (L_vec, R_vec) and the final scalars a, b."""

    L_vec: tuple[bytes, ...]
    R_vec: tuple[bytes, ...]
    a: int
    b: int

    @classmethod
    def create(
        cls,
        transcript: Transcript,
        Q: bytes,
        G_vec: list[bytes],
        H_vec: list[bytes],
        a_vec: list[int],
        b_vec: list[int],
    ) -> "InnerProductProof":
        """
        Build the argument for vectors a, b against generators G, H.

        All four vectors must share a power-of-two length.
        """
        n = len(G_vec)
        if not (len(H_vec) == len(a_vec) == len(b_vec) == n):
            raise ValueError("Inner product inputs must share one length")
        if n == 0 or n & (n - 1):
            raise ValueError(f"Vector length {n} is not a power of two")

        transcript.innerproduct_domain_sep(n)

        G, H, a, b = list(G_vec), list(H_vec), list(a_vec), list(b_vec)
        L_vec: list[bytes] = []
        R_vec: list[bytes] = []

        while n > 1:
            n //= 2
            a_lo, a_hi = a[:n], a[n:]
            b_lo, b_hi = b[:n], b[n:]
            G_lo, G_hi = G[:n], G[n:]
            H_lo, H_hi = H[:n], H[n:]

            c_L = inner_product(a_lo, b_hi)
            c_R = inner_product(a_hi, b_lo)

            L = multiscalar_mul(a_lo + b_hi + [c_L], G_hi + H_lo + [Q])
            R = multiscalar_mul(a_hi + b_lo + [c_R], G_lo + H_hi + [Q])
            L_vec.append(L)
            R_vec.append(R)

            transcript.append_point(b"L", L)
            transcript.append_point(b"R", R)
            u = transcript.challenge_scalar(b"u")
            u_inv = invert(u)

            a = [(a_lo[i] * u + u_inv * a_hi[i]) % GROUP_ORDER for i in range(n)]
            b = [(b_lo[i] * u_inv + u * b_hi[i]) % GROUP_ORDER for i in range(n)]
            G = [multiscalar_mul([u_inv, u], [G_lo[i], G_hi[i]]) for i in range(n)]
            H = [multiscalar_mul([u, u_inv], [H_lo[i], H_hi[i]]) for i in range(n)]

        return cls(L_vec=tuple(L_vec), R_vec=tuple(R_vec), a=a[0], b=b[0])

    def verification_scalars(
        self,
        n: int,
        transcript: Transcript,
    ) -> tuple[list[int], list[int], list[int]]:
        """
        Replay the transcript and expand the folding challenges.

        Returns:
            (u_sq, u_inv_sq, s) where s[i] is the coefficient of G_i in the
            fully folded generator; H_i folds with 1 / s[i].

        Raises:
            ValueError: If the round count does not match n
        """
        lg_n = len(self.L_vec)
        if lg_n > MAX_ROUNDS or n != (1 << lg_n):
            raise ValueError(f"Proof has {lg_n} rounds, expected log2({n})")

        transcript.innerproduct_domain_sep(n)

        challenges = []
        for L, R in zip(self.L_vec, self.R_vec, strict=True):
            transcript.append_point(b"L", L)
            transcript.append_point(b"R", R)
            challenges.append(transcript.challenge_scalar(b"u"))

        challenges_inv = [invert(u) for u in challenges]
        u_sq = [u * u % GROUP_ORDER for u in challenges]
        u_inv_sq = [u * u % GROUP_ORDER for u in challenges_inv]

        # Round j splits on bit (lg_n - 1 - j) of the generator index
        s = []
        for i in range(n):
            coeff = 1
            for j in range(lg_n):
                bit = (i >> (lg_n - 1 - j)) & 1
                coeff = coeff * (challenges[j] if bit else challenges_inv[j]) % GROUP_ORDER
            s.append(coeff)

        return u_sq, u_inv_sq, s

    def to_bytes(self) -> bytes:
        out = bytearray()
        for L, R in zip(self.L_vec, self.R_vec, strict=True):
            out += L
            out += R
        out += scalar_to_bytes(self.a)
        out += scalar_to_bytes(self.b)
        return bytes(out)

    @classmethod
    def from_bytes(cls, data: bytes) -> "InnerProductProof":
        """
        Parse L_0 R_0 ... L_k R_k a b.

        Raises:
            ProofDecodeError: On bad length, too many rounds, or bad elements
        """
        if len(data) % 32 != 0 or len(data) < 2 * SCALAR_BYTES:
            raise ProofDecodeError("Inner product proof has invalid length")
        num_elements = len(data) // 32
        if (num_elements - 2) % 2 != 0:
            raise ProofDecodeError("Inner product proof has unpaired rounds")
        lg_n = (num_elements - 2) // 2
        if lg_n > MAX_ROUNDS:
            raise ProofDecodeError("Inner product proof has too many rounds")

        L_vec = []
        R_vec = []
        for i in range(lg_n):
            pos = 2 * i * 32
            L_vec.append(decode_point(data[pos:pos + 32]))
            R_vec.append(decode_point(data[pos + 32:pos + 64]))

        pos = 2 * lg_n * 32
        a = scalar_from_bytes(data[pos:pos + 32])
        b = scalar_from_bytes(data[pos + 32:pos + 64])
        return cls(L_vec=tuple(L_vec), R_vec=tuple(R_vec), a=a, b=b)
