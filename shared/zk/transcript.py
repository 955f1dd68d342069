"""
Fiat-Shamir Transcript
======================

Running SHA3-512 transcript used to derive non-interactive challenges.

Every message is framed as len(label) || label || len(data) || data so
that no two distinct sequences of appends hash the same. Each challenge is
fed back into the state, so consecutive challenges with the same label
still differ.
"""

import hashlib

from shared.zk.group import POINT_BYTES, scalar_from_wide, scalar_to_bytes


class Transcript:
    """
    Prover/verifier transcript.

    Usage:
        transcript = Transcript(b"CreditScoreProof.v1")
        transcript.append_point(b"V", commitment)
        y = transcript.challenge_scalar(b"y")
    """

    def __init__(self, label: bytes):
        self._state = hashlib.sha3_512()
        self.append_message(b"dom-sep", label)

    def append_message(self, label: bytes, message: bytes) -> None:
        self._state.update(len(label).to_bytes(4, "big"))
        self._state.update(label)
        self._state.update(len(message).to_bytes(4, "big"))
        self._state.update(message)

    def append_u64(self, label: bytes, value: int) -> None:
        self.append_message(label, value.to_bytes(8, "little"))

    def append_point(self, label: bytes, point: bytes) -> None:
        if len(point) != POINT_BYTES:
            raise ValueError(f"Point must be {POINT_BYTES} bytes")
        self.append_message(label, point)

    def append_scalar(self, label: bytes, scalar: int) -> None:
        self.append_message(label, scalar_to_bytes(scalar))

    def rangeproof_domain_sep(self, n: int, m: int) -> None:
        self.append_message(b"dom-sep", b"rangeproof v1")
        self.append_u64(b"n", n)
        self.append_u64(b"m", m)

    def innerproduct_domain_sep(self, n: int) -> None:
        self.append_message(b"dom-sep", b"ipp v1")
        self.append_u64(b"n", n)

    def challenge_scalar(self, label: bytes) -> int:
        """Derive a challenge scalar bound to everything appended so far."""
        fork = self._state.copy()
        fork.update(b"challenge")
        fork.update(len(label).to_bytes(4, "big"))
        fork.update(label)
        digest = fork.digest()
        self.append_message(label, digest)
        return scalar_from_wide(digest)
