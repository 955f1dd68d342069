"""
Bulletproofs Range Proof
========================

Single-value range proof: given a Pedersen commitment V = v*B + gamma*B',
prove v lies in [0, 2^n) without revealing v or gamma.

The prover commits to the bit decomposition of v (A) and to blinding
vectors (S), commits to the coefficients of t(X) = <l(X), r(X)> (T_1, T_2),
and closes with an inner product argument over the evaluated l and r.
The verifier checks the polynomial identity on t(x) and the inner product
relation, each folded into one multiscalar multiplication.

Wire format (32-byte elements):
    A || S || T_1 || T_2 || t_x || t_x_blinding || e_blinding || ipp

Version: 1.0.0
"""

from dataclasses import dataclass

from shared.zk.exceptions import ProofDecodeError, ValueOutOfRangeError
from shared.zk.generators import BulletproofGens, PedersenGens
from shared.zk.group import (
    GROUP_ORDER,
    IDENTITY,
    decode_point,
    inner_product,
    invert,
    is_valid_point,
    mul,
    multiscalar_mul,
    powers,
    random_scalar,
    scalar_from_bytes,
    scalar_to_bytes,
)
from shared.zk.inner_product import InnerProductProof
from shared.zk.transcript import Transcript


VALID_BITSIZES = (8, 16, 32, 64)

# A, S, T_1, T_2 points followed by t_x, t_x_blinding, e_blinding scalars
_HEADER_ELEMENTS = 7


@dataclass(frozen=True)
class RangeProof:
    """A non-interactive range proof for one committed value."""

    A: bytes
    S: bytes
    T_1: bytes
    T_2: bytes
    t_x: int
    t_x_blinding: int
    e_blinding: int
    ipp_proof: InnerProductProof

    # =========================================================================
    # Proving
    # =========================================================================

    @classmethod
    def prove_single(
        cls,
        bp_gens: BulletproofGens,
        pc_gens: PedersenGens,
        transcript: Transcript,
        v: int,
        v_blinding: int,
        n: int,
    ) -> tuple["RangeProof", bytes]:
        """
        Prove that v is in [0, 2^n).

        Args:
            bp_gens: Vector generators (capacity >= n)
            pc_gens: Pedersen generators
            transcript: Fresh transcript seeded with the protocol label
            v: Secret value
            v_blinding: Secret blinding factor for the commitment
            n: Bit width

        Returns:
            Tuple of (proof, commitment bytes)

        Raises:
            ValueError: If n is unsupported or the generators are too short
            ValueOutOfRangeError: If v does not fit in n bits
        """
        if n not in VALID_BITSIZES:
            raise ValueError(f"Invalid bitsize {n}, expected one of {VALID_BITSIZES}")
        if bp_gens.gens_capacity < n:
            raise ValueError(
                f"Generator capacity {bp_gens.gens_capacity} is too small for {n} bits"
            )
        if v < 0 or v >> n:
            raise ValueOutOfRangeError(f"Value does not fit in {n} bits")

        transcript.rangeproof_domain_sep(n, 1)

        V = pc_gens.commit(v, v_blinding)
        transcript.append_point(b"V", V)

        G = bp_gens.G(n)
        H = bp_gens.H(n)

        # a_L holds the bits of v, a_R = a_L - 1
        a_L = [(v >> i) & 1 for i in range(n)]
        a_R = [(bit - 1) % GROUP_ORDER for bit in a_L]

        a_blinding = random_scalar()
        A = multiscalar_mul([a_blinding] + a_L + a_R, [pc_gens.B_blinding] + G + H)

        s_L = [random_scalar() for _ in range(n)]
        s_R = [random_scalar() for _ in range(n)]
        s_blinding = random_scalar()
        S = multiscalar_mul([s_blinding] + s_L + s_R, [pc_gens.B_blinding] + G + H)

        transcript.append_point(b"A", A)
        transcript.append_point(b"S", S)

        y = transcript.challenge_scalar(b"y")
        z = transcript.challenge_scalar(b"z")
        zz = z * z % GROUP_ORDER

        y_pow = powers(y, n)

        # l(X) = l0 + l1*X, r(X) = r0 + r1*X
        l0 = [(a_L[i] - z) % GROUP_ORDER for i in range(n)]
        l1 = s_L
        r0 = [(y_pow[i] * (a_R[i] + z) + zz * (1 << i)) % GROUP_ORDER for i in range(n)]
        r1 = [y_pow[i] * s_R[i] % GROUP_ORDER for i in range(n)]

        t0 = inner_product(l0, r0)
        t1 = (inner_product(l0, r1) + inner_product(l1, r0)) % GROUP_ORDER
        t2 = inner_product(l1, r1)

        t1_blinding = random_scalar()
        t2_blinding = random_scalar()
        T_1 = pc_gens.commit(t1, t1_blinding)
        T_2 = pc_gens.commit(t2, t2_blinding)

        transcript.append_point(b"T_1", T_1)
        transcript.append_point(b"T_2", T_2)

        x = transcript.challenge_scalar(b"x")
        xx = x * x % GROUP_ORDER

        t_x = (t0 + x * t1 + xx * t2) % GROUP_ORDER
        t_x_blinding = (zz * v_blinding + x * t1_blinding + xx * t2_blinding) % GROUP_ORDER
        e_blinding = (a_blinding + x * s_blinding) % GROUP_ORDER

        transcript.append_scalar(b"t_x", t_x)
        transcript.append_scalar(b"t_x_blinding", t_x_blinding)
        transcript.append_scalar(b"e_blinding", e_blinding)

        w = transcript.challenge_scalar(b"w")
        Q = mul(w, pc_gens.B)

        y_inv_pow = powers(invert(y), n)
        H_prime = [mul(y_inv_pow[i], H[i]) for i in range(n)]

        l_vec = [(l0[i] + x * l1[i]) % GROUP_ORDER for i in range(n)]
        r_vec = [(r0[i] + x * r1[i]) % GROUP_ORDER for i in range(n)]

        ipp_proof = InnerProductProof.create(transcript, Q, G, H_prime, l_vec, r_vec)

        proof = cls(
            A=A,
            S=S,
            T_1=T_1,
            T_2=T_2,
            t_x=t_x,
            t_x_blinding=t_x_blinding,
            e_blinding=e_blinding,
            ipp_proof=ipp_proof,
        )
        return proof, V

    # =========================================================================
    # Verification
    # =========================================================================

    def verify_single(
        self,
        bp_gens: BulletproofGens,
        pc_gens: PedersenGens,
        transcript: Transcript,
        V: bytes,
        n: int,
    ) -> bool:
        """
        Check the proof against commitment V for bit width n.

        The transcript must be seeded with the same label the prover used.
        """
        if n not in VALID_BITSIZES or bp_gens.gens_capacity < n:
            return False
        if not is_valid_point(V):
            return False

        transcript.rangeproof_domain_sep(n, 1)
        transcript.append_point(b"V", V)

        if self.A == IDENTITY or self.S == IDENTITY:
            return False
        transcript.append_point(b"A", self.A)
        transcript.append_point(b"S", self.S)

        y = transcript.challenge_scalar(b"y")
        z = transcript.challenge_scalar(b"z")
        zz = z * z % GROUP_ORDER

        if self.T_1 == IDENTITY or self.T_2 == IDENTITY:
            return False
        transcript.append_point(b"T_1", self.T_1)
        transcript.append_point(b"T_2", self.T_2)

        x = transcript.challenge_scalar(b"x")
        xx = x * x % GROUP_ORDER

        transcript.append_scalar(b"t_x", self.t_x)
        transcript.append_scalar(b"t_x_blinding", self.t_x_blinding)
        transcript.append_scalar(b"e_blinding", self.e_blinding)

        w = transcript.challenge_scalar(b"w")

        try:
            u_sq, u_inv_sq, s = self.ipp_proof.verification_scalars(n, transcript)
            y_inv = invert(y)
        except (ValueError, ZeroDivisionError):
            return False

        y_pow = powers(y, n)
        y_inv_pow = powers(y_inv, n)

        # Complementing the index bits inverts every challenge factor
        s_inv = list(reversed(s))

        a = self.ipp_proof.a
        b = self.ipp_proof.b

        # t(x) identity: t_x*B + t_x_blinding*B' == z^2*V + delta*B + x*T_1 + x^2*T_2
        delta = ((z - zz) * sum(y_pow) - zz * z * ((1 << n) - 1)) % GROUP_ORDER
        poly_check = multiscalar_mul(
            [self.t_x - delta, self.t_x_blinding, -zz, -x, -xx],
            [pc_gens.B, pc_gens.B_blinding, V, self.T_1, self.T_2],
        )
        if poly_check != IDENTITY:
            return False

        G = bp_gens.G(n)
        H = bp_gens.H(n)
        g_scalars = [(-z - a * s[i]) % GROUP_ORDER for i in range(n)]
        h_scalars = [
            (z + y_inv_pow[i] * (zz * (1 << i) - b * s_inv[i])) % GROUP_ORDER
            for i in range(n)
        ]

        ipp_check = multiscalar_mul(
            [1, x]
            + g_scalars
            + h_scalars
            + [-self.e_blinding, w * (self.t_x - a * b)]
            + u_sq
            + u_inv_sq,
            [self.A, self.S]
            + G
            + H
            + [pc_gens.B_blinding, pc_gens.B]
            + list(self.ipp_proof.L_vec)
            + list(self.ipp_proof.R_vec),
        )
        return ipp_check == IDENTITY

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_bytes(self) -> bytes:
        return b"".join(
            [
                self.A,
                self.S,
                self.T_1,
                self.T_2,
                scalar_to_bytes(self.t_x),
                scalar_to_bytes(self.t_x_blinding),
                scalar_to_bytes(self.e_blinding),
                self.ipp_proof.to_bytes(),
            ]
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "RangeProof":
        """
        Parse a serialized proof.

        Raises:
            ProofDecodeError: On truncated data or invalid elements
        """
        if len(data) % 32 != 0:
            raise ProofDecodeError("Proof length is not a multiple of 32 bytes")
        if len(data) < _HEADER_ELEMENTS * 32:
            raise ProofDecodeError("Proof is truncated")

        chunks = [data[i * 32:(i + 1) * 32] for i in range(_HEADER_ELEMENTS)]
        return cls(
            A=decode_point(chunks[0]),
            S=decode_point(chunks[1]),
            T_1=decode_point(chunks[2]),
            T_2=decode_point(chunks[3]),
            t_x=scalar_from_bytes(chunks[4]),
            t_x_blinding=scalar_from_bytes(chunks[5]),
            e_blinding=scalar_from_bytes(chunks[6]),
            ipp_proof=InnerProductProof.from_bytes(data[_HEADER_ELEMENTS * 32:]),
        )
