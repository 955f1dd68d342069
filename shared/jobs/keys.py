"""
Job Keys
========

Fixed names shared by every producer and consumer of the pipeline.
"""

JOB_QUEUE_KEY = "zkp:jobs"
RESULT_KEY_PREFIX = "zkp:result:"

# Results expire one day after they are written
RESULT_TTL_SECONDS = 86_400


def result_key(job_id: str) -> str:
    """Storage key for a job's result."""
    return f"{RESULT_KEY_PREFIX}{job_id}"
