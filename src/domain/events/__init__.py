"""
Domain events package.
"""

from .job_changed import JobChanged, JobChangeType, agency_channel

__all__ = [
    "JobChangeType",
    "JobChanged",
    "agency_channel",
]
