"""
API schemas for the dispatch service.
"""

from .common import ErrorBody, ErrorResponse
from .engineer import EngineerLocationResponse, EngineerLocationUpdateRequest
from .job import (
    AssignJobRequest,
    AssignJobResponse,
    CandidateListResponse,
    CandidateResponse,
    JobListResponse,
    JobResponse,
)

__all__ = [
    "AssignJobRequest",
    "AssignJobResponse",
    "CandidateListResponse",
    "CandidateResponse",
    "EngineerLocationResponse",
    "EngineerLocationUpdateRequest",
    "ErrorBody",
    "ErrorResponse",
    "JobListResponse",
    "JobResponse",
]
