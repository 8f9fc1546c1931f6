# =============================================================================
# core/services/job_service.py - Job CRUD Operations
# =============================================================================
# Every query is scoped by createdBy, so a user can never read or change
# another user's jobs. A job owned by someone else looks exactly like a
# missing one.
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Any

from pymongo import ReturnDocument

from app.exceptions import BadRequestError, InvalidIdError, JobNotFoundError
from core.models.job import JobCreate, JobUpdate
from lib.mongo_client import Database
from lib.utils import parse_object_id, serialize_document

logger = logging.getLogger(__name__)

JOBS_COLLECTION = "jobs"


class JobService:
    """
    Service for job management.

    Provides a clean interface between API routes and the jobs collection.
    """

    def __init__(self, database: Database):
        self._database = database

    @property
    def collection(self):
        return self._database.collection(JOBS_COLLECTION)

    async def ensure_indexes(self) -> None:
        await self.collection.create_index([("createdBy", 1), ("createdAt", -1)])

    def _owner_filter(self, job_id: str, user_id: str) -> dict[str, Any]:
        oid = parse_object_id(job_id)
        if oid is None:
            raise InvalidIdError(job_id)
        owner = parse_object_id(user_id)
        return {"_id": oid, "createdBy": owner if owner is not None else user_id}

    async def list_jobs(self, user_id: str) -> list[dict[str, Any]]:
        """Return all jobs of a user, newest first."""
        owner = parse_object_id(user_id) or user_id
        cursor = self.collection.find({"createdBy": owner}).sort("createdAt", -1)
        jobs = await cursor.to_list(length=None)
        return [serialize_document(job) for job in jobs]

    async def create_job(self, user_id: str, data: JobCreate) -> dict[str, Any]:
        now = datetime.now(timezone.utc)
        document = {
            "company": data.company,
            "position": data.position,
            "status": data.status.value,
            "createdBy": parse_object_id(user_id) or user_id,
            "createdAt": now,
            "updatedAt": now,
        }
        result = await self.collection.insert_one(document)
        document["_id"] = result.inserted_id
        logger.info(f"Created job: {result.inserted_id} for user: {user_id}")
        return serialize_document(document)

    async def get_job(self, user_id: str, job_id: str) -> dict[str, Any]:
        """
        Get one job owned by the user.

        Raises:
            InvalidIdError: If job_id is not an ObjectId
            JobNotFoundError: If no such job exists for this user
        """
        job = await self.collection.find_one(self._owner_filter(job_id, user_id))
        if job is None:
            raise JobNotFoundError(job_id)
        return serialize_document(job)

    async def update_job(self, user_id: str, job_id: str, data: JobUpdate) -> dict[str, Any]:
        """
        Update company/position/status of a job.

        Raises:
            BadRequestError: If company or position is missing or empty
            JobNotFoundError: If no such job exists for this user
        """
        if not data.company or not data.position:
            raise BadRequestError(
                "Company or Position fields cannot be empty",
                code="EMPTY_JOB_FIELDS",
            )

        changes = data.model_dump(exclude_none=True, mode="json")
        changes["updatedAt"] = datetime.now(timezone.utc)

        job = await self.collection.find_one_and_update(
            self._owner_filter(job_id, user_id),
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
        if job is None:
            raise JobNotFoundError(job_id)

        logger.info(f"Updated job: {job_id}")
        return serialize_document(job)

    async def delete_job(self, user_id: str, job_id: str) -> None:
        result = await self.collection.delete_one(self._owner_filter(job_id, user_id))
        if result.deleted_count == 0:
            raise JobNotFoundError(job_id)
        logger.info(f"Deleted job: {job_id}")
