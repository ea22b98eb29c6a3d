# salonbook/services/storage.py
"""Shared helpers for the SQLAlchemy-backed stores"""
from contextlib import asynccontextmanager
from typing import AsyncIterator
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from salonbook.core.exceptions import StorageError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def storage_errors(db: AsyncSession, action: str) -> AsyncIterator[None]:
    """
    Translate driver failures into StorageError after rolling back.

    IntegrityError passes through untouched so callers can map constraint
    violations to domain errors.
    """
    try:
        yield
    except IntegrityError:
        raise
    except SQLAlchemyError as exc:
        logger.error(f"Storage failure while trying to {action}: {exc}")
        await db.rollback()
        raise StorageError(f"Failed to {action}") from exc
