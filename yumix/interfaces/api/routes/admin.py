"""Administrator settings and scheduled job controls."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from yumix.application.use_cases.notifications import (
    get_admin_preferences as get_admin_preferences_uc,
    update_admin_preferences as update_admin_preferences_uc,
)
from yumix.domain.entities import Admin
from yumix.domain.errors import RecipientNotFoundError, StoreError
from yumix.infrastructure.database import get_db
from yumix.infrastructure.scheduler import Scheduler
from yumix.interfaces.api.dependencies import get_current_admin, get_scheduler
from yumix.interfaces.api.responses import failure_response
from yumix.interfaces.api.schemas import (
    AdminPreferencesResponse,
    AdminPreferencesUpdate,
    JobRunResponse,
    ScheduledJobListResponse,
    ScheduledJobRead,
)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/preferences", response_model=AdminPreferencesResponse)
def read_preferences(
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    """Return the notification switches of the authenticated admin."""

    try:
        preferences = get_admin_preferences_uc(db, current_admin.id)
    except RecipientNotFoundError as exc:
        return failure_response(status.HTTP_404_NOT_FOUND, str(exc))
    except StoreError as exc:
        return failure_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc), error=exc.__cause__)
    return AdminPreferencesResponse(data=preferences)


@router.put("/preferences", response_model=AdminPreferencesResponse)
def update_preferences(
    payload: AdminPreferencesUpdate,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    """Merge the provided switches into the admin's stored preferences."""

    try:
        preferences = update_admin_preferences_uc(db, current_admin.id, payload.changes())
    except RecipientNotFoundError as exc:
        return failure_response(status.HTTP_404_NOT_FOUND, str(exc))
    except StoreError as exc:
        return failure_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc), error=exc.__cause__)
    return AdminPreferencesResponse(
        message="Preferences updated successfully", data=preferences
    )


@router.get("/jobs", response_model=ScheduledJobListResponse)
def list_jobs(
    scheduler: Scheduler = Depends(get_scheduler),
    _: Admin = Depends(get_current_admin),
) -> ScheduledJobListResponse:
    """List the recurring jobs, their schedule and their last run."""

    jobs = [
        ScheduledJobRead(
            name=job.name,
            at=job.at,
            description=job.description,
            next_run=scheduler.next_run(job.name).isoformat() if scheduler.running else None,
            last_run=job.last_run,
        )
        for job in scheduler.jobs
    ]
    return ScheduledJobListResponse(running=scheduler.running, data=jobs)


@router.post("/jobs/{job_name}/run", response_model=JobRunResponse)
def run_job(
    job_name: str,
    scheduler: Scheduler = Depends(get_scheduler),
    _: Admin = Depends(get_current_admin),
):
    """Run a recurring job immediately and report its outcome."""

    if job_name not in scheduler:
        return failure_response(status.HTTP_404_NOT_FOUND, f"Unknown job: {job_name}")
    summary = scheduler.run_job(job_name)
    if summary["status"] == "skipped":
        return failure_response(
            status.HTTP_409_CONFLICT, f"Job {job_name} is already running"
        )
    return JobRunResponse(success=summary["status"] == "success", data=summary)


__all__ = ["router"]
