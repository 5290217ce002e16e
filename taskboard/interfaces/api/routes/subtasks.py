"""Endpoints for the subtasks of a task."""

from typing import Literal

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from taskboard.application.use_cases.notifications import FanoutEngine
from taskboard.application.use_cases.subtasks import (
    add_subtask_comment,
    create_subtask,
    delete_subtask,
    get_subtask,
    list_subtasks,
    update_subtask,
    update_subtask_status,
)
from taskboard.domain.entities import User
from taskboard.infrastructure.database import get_db
from taskboard.interfaces.api.dependencies import get_current_user, get_fanout_engine
from taskboard.interfaces.api.routes_helpers import translate_domain_errors
from taskboard.interfaces.api.schemas import (
    CommentCreate,
    PaginatedResponse,
    StatusUpdate,
    SubtaskCreate,
    SubtaskRead,
    SubtaskUpdate,
)
from taskboard.utils import PageRequest

router = APIRouter(prefix="/tasks/{task_id}/subtasks", tags=["subtasks"])


@router.post("/", response_model=SubtaskRead, status_code=status.HTTP_201_CREATED)
def create_subtask_endpoint(
    task_id: int,
    payload: SubtaskCreate,
    db: Session = Depends(get_db),
    engine: FanoutEngine = Depends(get_fanout_engine),
    current_user: User = Depends(get_current_user),
) -> SubtaskRead:
    """Create a subtask; its assignees must already take part in the task."""

    with translate_domain_errors():
        subtask = create_subtask(
            db,
            engine,
            actor=current_user,
            task_id=task_id,
            title=payload.title,
            description=payload.description,
            priority=payload.priority,
            assigned_to=payload.assigned_to,
        )
    return SubtaskRead.model_validate(subtask)


@router.get("/", response_model=PaginatedResponse[SubtaskRead])
def list_subtasks_endpoint(
    task_id: int,
    scope: Literal["all", "mine", "assigned"] = Query("all"),
    status_filter: str | None = Query(None, alias="status"),
    priority: str | None = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> PaginatedResponse[SubtaskRead]:
    with translate_domain_errors():
        result = list_subtasks(
            db,
            task_id=task_id,
            user_id=current_user.id,
            page=PageRequest(page=page, limit=limit),
            scope=scope,
            status=status_filter,
            priority=priority,
        )
    return PaginatedResponse[SubtaskRead].from_page(result, SubtaskRead.model_validate)


@router.get("/{subtask_id}", response_model=SubtaskRead)
def get_subtask_endpoint(
    task_id: int,
    subtask_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> SubtaskRead:
    with translate_domain_errors():
        subtask = get_subtask(
            db, task_id=task_id, subtask_id=subtask_id, user_id=current_user.id
        )
    return SubtaskRead.model_validate(subtask)


@router.patch("/{subtask_id}", response_model=SubtaskRead)
def update_subtask_endpoint(
    task_id: int,
    subtask_id: int,
    payload: SubtaskUpdate,
    db: Session = Depends(get_db),
    engine: FanoutEngine = Depends(get_fanout_engine),
    current_user: User = Depends(get_current_user),
) -> SubtaskRead:
    with translate_domain_errors():
        subtask = update_subtask(
            db,
            engine,
            actor=current_user,
            task_id=task_id,
            subtask_id=subtask_id,
            **payload.model_dump(exclude_unset=True),
        )
    return SubtaskRead.model_validate(subtask)


@router.patch("/{subtask_id}/status", response_model=SubtaskRead)
def update_subtask_status_endpoint(
    task_id: int,
    subtask_id: int,
    payload: StatusUpdate,
    db: Session = Depends(get_db),
    engine: FanoutEngine = Depends(get_fanout_engine),
    current_user: User = Depends(get_current_user),
) -> SubtaskRead:
    with translate_domain_errors():
        subtask = update_subtask_status(
            db,
            engine,
            actor=current_user,
            task_id=task_id,
            subtask_id=subtask_id,
            status=payload.status,
        )
    return SubtaskRead.model_validate(subtask)


@router.post(
    "/{subtask_id}/comments",
    response_model=SubtaskRead,
    status_code=status.HTTP_201_CREATED,
)
def add_subtask_comment_endpoint(
    task_id: int,
    subtask_id: int,
    payload: CommentCreate,
    db: Session = Depends(get_db),
    engine: FanoutEngine = Depends(get_fanout_engine),
    current_user: User = Depends(get_current_user),
) -> SubtaskRead:
    with translate_domain_errors():
        subtask = add_subtask_comment(
            db,
            engine,
            actor=current_user,
            task_id=task_id,
            subtask_id=subtask_id,
            text=payload.text,
        )
    return SubtaskRead.model_validate(subtask)


@router.delete("/{subtask_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_subtask_endpoint(
    task_id: int,
    subtask_id: int,
    db: Session = Depends(get_db),
    engine: FanoutEngine = Depends(get_fanout_engine),
    current_user: User = Depends(get_current_user),
) -> Response:
    with translate_domain_errors():
        delete_subtask(
            db, engine, actor=current_user, task_id=task_id, subtask_id=subtask_id
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
