"""
Job Pipeline Exceptions
=======================
"""


class JobsError(Exception):
    """Base exception for queue and result store errors."""

    pass


class TransportError(JobsError):
    """The backing store could not be reached or rejected the command."""

    pass


class PayloadDecodeError(JobsError):
    """A queue message is not a well-formed job payload."""

    pass


class ResultDecodeError(JobsError):
    """A stored result could not be parsed."""

    def __init__(self, job_id: str, reason: str):
        self.job_id = job_id
        super().__init__(f"Stored result for job {job_id} is unreadable: {reason}")
