"""
Scoreproof Test Suite
=====================

Test organization:
- tests/unit/          - Unit tests (no external dependencies)
- tests/services/      - Per-service tests on the in-memory backend
- tests/e2e/           - End-to-end tests (full pipeline)

Run tests:
    pytest                          # All tests
    pytest tests/unit               # Unit tests only
    pytest tests/e2e                # Pipeline tests only
"""
