"""Endpoints for registration and token issuance."""

import logging
from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from taskboard.application.use_cases.users import authenticate_user, register_user
from taskboard.config import get_settings
from taskboard.domain.entities import User
from taskboard.infrastructure.database import get_db
from taskboard.infrastructure.security import create_access_token
from taskboard.interfaces.api.dependencies import get_current_user
from taskboard.interfaces.api.routes_helpers import translate_domain_errors
from taskboard.interfaces.api.schemas import Token, UserRead, UserRegister

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register(payload: UserRegister, db: Session = Depends(get_db)) -> UserRead:
    """Create a new account."""

    with translate_domain_errors():
        user = register_user(
            db,
            username=payload.username,
            email=str(payload.email),
            password=payload.password,
        )
    logger.info("Registered user %s", user.id)
    return UserRead.model_validate(user)


# Keeps the signature expected by OAuth2PasswordRequestForm.
@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    """Authenticate by email and return a bearer JWT."""

    user = authenticate_user(db, form_data.username, form_data.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = create_access_token(
        data={"sub": str(user.id)},
        expires_delta=timedelta(minutes=get_settings().access_token_expire_minutes),
    )
    return {"access_token": access_token, "token_type": "bearer"}


@router.get("/me", response_model=UserRead)
def read_current_user(current_user: User = Depends(get_current_user)) -> UserRead:
    return UserRead.model_validate(current_user)
