"""Endpoints for tasks and their comments."""

from typing import Literal

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from taskboard.application.use_cases.notifications import FanoutEngine
from taskboard.application.use_cases.tasks import (
    add_task_comment,
    create_task,
    delete_task,
    get_task,
    list_tasks,
    update_task,
    update_task_status,
)
from taskboard.domain.entities import User
from taskboard.infrastructure.database import get_db
from taskboard.interfaces.api.dependencies import get_current_user, get_fanout_engine
from taskboard.interfaces.api.routes_helpers import translate_domain_errors
from taskboard.interfaces.api.schemas import (
    CommentCreate,
    PaginatedResponse,
    StatusUpdate,
    TaskCreate,
    TaskRead,
    TaskUpdate,
)
from taskboard.utils import PageRequest

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.post("/", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
def create_task_endpoint(
    payload: TaskCreate,
    db: Session = Depends(get_db),
    engine: FanoutEngine = Depends(get_fanout_engine),
    current_user: User = Depends(get_current_user),
) -> TaskRead:
    with translate_domain_errors():
        task = create_task(
            db,
            engine,
            actor=current_user,
            title=payload.title,
            description=payload.description,
            priority=payload.priority,
            assigned_to=payload.assigned_to,
        )
    return TaskRead.model_validate(task)


@router.get("/", response_model=PaginatedResponse[TaskRead])
def list_tasks_endpoint(
    scope: Literal["all", "mine", "assigned"] = Query("all"),
    status_filter: str | None = Query(None, alias="status"),
    priority: str | None = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> PaginatedResponse[TaskRead]:
    """List tasks created by or assigned to the authenticated user."""

    with translate_domain_errors():
        result = list_tasks(
            db,
            user_id=current_user.id,
            page=PageRequest(page=page, limit=limit),
            scope=scope,
            status=status_filter,
            priority=priority,
        )
    return PaginatedResponse[TaskRead].from_page(result, TaskRead.model_validate)


@router.get("/{task_id}", response_model=TaskRead)
def get_task_endpoint(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> TaskRead:
    with translate_domain_errors():
        task = get_task(db, task_id=task_id, user_id=current_user.id)
    return TaskRead.model_validate(task)


@router.patch("/{task_id}", response_model=TaskRead)
def update_task_endpoint(
    task_id: int,
    payload: TaskUpdate,
    db: Session = Depends(get_db),
    engine: FanoutEngine = Depends(get_fanout_engine),
    current_user: User = Depends(get_current_user),
) -> TaskRead:
    """Edit the task details and/or replace its assignees."""

    with translate_domain_errors():
        task = update_task(
            db,
            engine,
            actor=current_user,
            task_id=task_id,
            **payload.model_dump(exclude_unset=True),
        )
    return TaskRead.model_validate(task)


@router.patch("/{task_id}/status", response_model=TaskRead)
def update_task_status_endpoint(
    task_id: int,
    payload: StatusUpdate,
    db: Session = Depends(get_db),
    engine: FanoutEngine = Depends(get_fanout_engine),
    current_user: User = Depends(get_current_user),
) -> TaskRead:
    with translate_domain_errors():
        task = update_task_status(
            db, engine, actor=current_user, task_id=task_id, status=payload.status
        )
    return TaskRead.model_validate(task)


@router.post("/{task_id}/comments", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
def add_task_comment_endpoint(
    task_id: int,
    payload: CommentCreate,
    db: Session = Depends(get_db),
    engine: FanoutEngine = Depends(get_fanout_engine),
    current_user: User = Depends(get_current_user),
) -> TaskRead:
    with translate_domain_errors():
        task = add_task_comment(
            db, engine, actor=current_user, task_id=task_id, text=payload.text
        )
    return TaskRead.model_validate(task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task_endpoint(
    task_id: int,
    db: Session = Depends(get_db),
    engine: FanoutEngine = Depends(get_fanout_engine),
    current_user: User = Depends(get_current_user),
) -> Response:
    """Delete the task together with its subtasks."""

    with translate_domain_errors():
        delete_task(db, engine, actor=current_user, task_id=task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
