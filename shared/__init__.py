"""
Scoreproof Shared Library
=========================

Common utilities, configurations, and abstractions shared across the
gateway, worker, and verifier.

Modules:
    - config: Configuration management with Pydantic Settings
    - logging: Structured logging with structlog
    - database: Redis client management
    - jobs: Job queue and result store contracts (Redis and in-memory)
    - models: Shared Pydantic models
    - zk: Pedersen commitments and Bulletproofs range proofs

Version: 0.1.0
"""

__version__ = "0.1.0"
__author__ = "Scoreproof Team"

from shared.config import settings
from shared.logging import get_logger, setup_logging

__all__ = [
    "settings",
    "get_logger",
    "setup_logging",
    "__version__",
]
