"""Explicit transactional boundary shared by a mutation and its notifications."""

from __future__ import annotations

import logging
from typing import Any, Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from taskboard.domain.errors import TransactionError

logger = logging.getLogger(__name__)


class UnitOfWork:
    """Group every write of one request into a single commit.

    Repositories built on :attr:`session` only flush; nothing is persisted
    until :meth:`commit` succeeds. Callbacks registered with :meth:`on_commit`
    run strictly after the commit is confirmed and never influence its
    outcome.

    Usage::

        with UnitOfWork(session) as uow:
            TaskRepository(uow.session).update(task)
            engine.notify(uow, MutationKind.UPDATED, context)
            uow.commit()
    """

    def __init__(self, session: Session) -> None:
        self.session = session
        self._callbacks: list[tuple[Callable[..., Any], tuple[Any, ...]]] = []
        self._committed = False

    def __enter__(self) -> "UnitOfWork":
        return self

    def __exit__(self, exc_type, exc, traceback) -> None:
        if exc_type is not None or not self._committed:
            self.rollback()

    @property
    def committed(self) -> bool:
        return self._committed

    def on_commit(self, callback: Callable[..., Any], *args: Any) -> None:
        """Schedule ``callback(*args)`` to run once the commit is confirmed."""

        self._callbacks.append((callback, args))

    def commit(self) -> None:
        """Commit every pending write and then run the post-commit callbacks."""

        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.rollback()
            raise TransactionError("Could not commit the transaction") from exc

        self._committed = True
        callbacks, self._callbacks = self._callbacks, []
        for callback, args in callbacks:
            try:
                callback(*args)
            except Exception:
                logger.exception("Post-commit callback %r failed", callback)

    def rollback(self) -> None:
        """Discard pending writes and callbacks."""

        self._callbacks.clear()
        if self._committed:
            return
        self.session.rollback()


__all__ = ["UnitOfWork"]
