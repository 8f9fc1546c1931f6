# =============================================================================
# core/models/job.py - Job Schemas
# =============================================================================
# These models define the API contract for job operations:
# - JobCreate: Input for POST /jobs
# - JobUpdate: Input for PATCH /jobs/{id}
# - JobResponse: One job as returned to its owner
# - JobList: Output for GET /jobs
#
# A job is one application a user is tracking. Every job belongs to exactly
# one user (created_by) and is only visible to that user.
# =============================================================================

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class JobStatus(str, Enum):
    """
    Where an application stands.

    Flow: pending -> interview -> (declined)
    """
    INTERVIEW = "interview"
    DECLINED = "declined"
    PENDING = "pending"


class JobCreate(BaseModel):
    """
    Schema for creating a job.

    The owner is taken from the bearer token, never from the body.

    Example:
        {"company": "Acme", "position": "Backend Engineer", "status": "pending"}
    """

    company: str = Field(
        ...,
        min_length=1,
        max_length=50,
        description="Company name"
    )

    position: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Position applied for"
    )

    status: JobStatus = Field(
        default=JobStatus.PENDING,
        description="Application status"
    )


class JobUpdate(BaseModel):
    """
    Schema for updating a job.

    company and position are checked for emptiness by the service so the
    client gets one combined message instead of per-field validation errors.
    """

    company: str | None = Field(default=None, max_length=50)
    position: str | None = Field(default=None, max_length=100)
    status: JobStatus | None = None


class JobResponse(BaseModel):
    """One job as stored, with ObjectIds rendered as strings."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    company: str
    position: str
    status: JobStatus
    created_by: str = Field(..., alias="createdBy")
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")


class JobEnvelope(BaseModel):
    job: JobResponse


class JobList(BaseModel):
    jobs: list[JobResponse]
    count: int
