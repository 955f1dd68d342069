"""
Scoreproof Services
===================

Processes of the score threshold proof pipeline.

Services:
- gateway: HTTP submission and result polling
- worker: Proof generation from the job queue
- verifier: Offline verification of published artifacts
"""

__all__ = [
    "gateway",
    "worker",
    "verifier",
]
