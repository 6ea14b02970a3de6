"""Staff task endpoints."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ...errors import SWMSError
from ...models.domain import Principal
from ...schemas.complaints import TaskCompleteRequest, TaskCreateRequest, TaskModel
from ...services import tasks as task_service
from ..deps import require_roles
from ..errors import http_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.post("", response_model=TaskModel, status_code=status.HTTP_200_OK)
def create_task(
    payload: TaskCreateRequest,
    _: Principal = Depends(require_roles("admin")),
) -> TaskModel:
    try:
        return TaskModel.from_domain(task_service.create_task(payload.complaint_id, payload.assigned_to))
    except SWMSError as exc:
        raise http_error(exc) from exc
    except Exception as exc:
        logger.exception(f"Error creating task: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to create task: {str(exc)}",
        ) from exc


@router.get("/mine", response_model=List[TaskModel], status_code=status.HTTP_200_OK)
def my_tasks(principal: Principal = Depends(require_roles("staff"))) -> List[TaskModel]:
    try:
        return [TaskModel.from_domain(task) for task in task_service.list_tasks_for_staff(principal.id)]
    except SWMSError as exc:
        raise http_error(exc) from exc


@router.put("/{task_id}/complete", response_model=TaskModel, status_code=status.HTTP_200_OK)
def complete_task(
    task_id: str,
    payload: TaskCompleteRequest | None = None,
    principal: Principal = Depends(require_roles("staff")),
) -> TaskModel:
    """Complete a task with optional photo proof; resolves the underlying complaint."""
    proof_photo_url = payload.proof_photo_url if payload else None
    try:
        return TaskModel.from_domain(task_service.complete_task(task_id, principal.id, proof_photo_url))
    except SWMSError as exc:
        raise http_error(exc) from exc
    except Exception as exc:
        logger.exception(f"Error completing task {task_id}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to complete task: {str(exc)}",
        ) from exc
