"""
Store call guard shared by the services.

Every failure of the underlying store is rolled back, logged
and re-raised as StoreUnavailableError, so callers see one
error type for infrastructure trouble regardless of the driver.
"""

import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from loyalty_admin.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)


@contextmanager
def store_call(db: Session, operation: str):
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Store call failed during %s", operation, exc_info=True)
        raise StoreUnavailableError(operation, e) from e
