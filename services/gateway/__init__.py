"""
Gateway Service
===============

Accepts proof jobs and serves their results.

Endpoints:
- POST /v1/verifications: Submit a score/threshold pair, returns a job id
- GET /v1/verifications/{job_id}: Poll for the job's result
"""
