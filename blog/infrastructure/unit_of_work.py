"""Transactional scope shared by the SQLAlchemy repositories."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from blog.shared.errors import ConstraintViolationError, StorageError
from blog.shared.logging import logger


@contextmanager
def unit_of_work_scope(factory: Callable[[], Session]) -> Iterator[Session]:
    """Yield a session that commits when the block exits cleanly.

    Integrity failures surface as ``ConstraintViolationError``; any other
    SQLAlchemy error becomes ``StorageError``. Neither is retried, the
    caller's operation is simply aborted.
    """

    session = factory()
    try:
        yield session
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        logger.warning(f"uow: constraint violation {exc.orig!r}")
        raise ConstraintViolationError() from exc
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error(f"uow: storage failure {type(exc).__name__}")
        raise StorageError() from exc
    except BaseException:
        session.rollback()
        raise
    finally:
        session.close()


__all__ = ["unit_of_work_scope"]
