"""Helper utilities shared across API route handlers."""

import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import HTTPException, status

from taskboard.domain.errors import (
    ConflictError,
    NotFoundError,
    TransactionError,
    ValidationError,
)

logger = logging.getLogger(__name__)


@contextmanager
def translate_domain_errors() -> Iterator[None]:
    """Re-raise domain errors from the wrapped block as ``HTTPException``."""

    try:
        yield
    except ConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except PermissionError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc
    except TransactionError as exc:
        logger.error("Transaction failed: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        ) from exc
