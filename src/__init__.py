"""
Field-Service Dispatch Core.

Candidate ranking and race-safe engineer assignment for field-service jobs.
"""

__version__ = "0.1.0"
__description__ = "Field-Service Dispatch Core"
