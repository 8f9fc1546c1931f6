# =============================================================================
# app/routers/jobs.py - Job CRUD Endpoints
# =============================================================================
# Mounted behind authenticate_user, so every handler here runs with
# request.state.user set. Jobs are always scoped to that user.
#
# The trailing catch-all routes keep the guard in front of the whole
# /api/v1/jobs prefix: unknown paths and methods answer 401 without a token
# and 404 with one.
# =============================================================================

from fastapi import APIRouter, Depends, Request, Response, status

from app.auth import AuthUser, authenticate_user
from app.dependencies import JobServiceDep
from app.exceptions import RouteNotFoundError
from core.models.job import JobCreate, JobEnvelope, JobList, JobUpdate

router = APIRouter()

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@router.get("", response_model=JobList)
@router.get("/", response_model=JobList)
async def get_all_jobs(
    jobs: JobServiceDep,
    user: AuthUser = Depends(authenticate_user),
):
    """List the caller's jobs, newest first."""
    items = await jobs.list_jobs(user.user_id)
    return {"jobs": items, "count": len(items)}


@router.post("", response_model=JobEnvelope, status_code=status.HTTP_201_CREATED)
@router.post("/", response_model=JobEnvelope, status_code=status.HTTP_201_CREATED)
async def create_job(
    body: JobCreate,
    jobs: JobServiceDep,
    user: AuthUser = Depends(authenticate_user),
):
    """
    Create a job owned by the caller.

    The owner always comes from the token; a createdBy in the body is ignored.
    """
    job = await jobs.create_job(user.user_id, body)
    return {"job": job}


@router.get("/{job_id}", response_model=JobEnvelope)
async def get_job(
    job_id: str,
    jobs: JobServiceDep,
    user: AuthUser = Depends(authenticate_user),
):
    job = await jobs.get_job(user.user_id, job_id)
    return {"job": job}


@router.patch("/{job_id}", response_model=JobEnvelope)
async def update_job(
    job_id: str,
    body: JobUpdate,
    jobs: JobServiceDep,
    user: AuthUser = Depends(authenticate_user),
):
    """
    Update a job.

    Raises:
        400: If company or position is empty
        404: If the job doesn't exist or isn't the caller's
    """
    job = await jobs.update_job(user.user_id, job_id, body)
    return {"job": job}


@router.delete("/{job_id}")
async def delete_job(
    job_id: str,
    jobs: JobServiceDep,
    user: AuthUser = Depends(authenticate_user),
):
    await jobs.delete_job(user.user_id, job_id)
    return Response(status_code=status.HTTP_200_OK)


# Must stay last: routes are matched in declaration order
@router.api_route("", methods=ALL_METHODS, include_in_schema=False)
@router.api_route("/{path:path}", methods=ALL_METHODS, include_in_schema=False)
async def unknown_job_route(
    request: Request,
    user: AuthUser = Depends(authenticate_user),
):
    raise RouteNotFoundError(request.url.path)
