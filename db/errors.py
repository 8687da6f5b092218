"""Translation of PyMongo failures into application exceptions."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

from pymongo.errors import DuplicateKeyError, PyMongoError

from core.exceptions import DuplicateResourceException, StoreException

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)


@contextmanager
def translate_store_errors(action: str) -> Iterator[None]:
    """Re-raise driver errors from the wrapped block as application errors.

    Args:
        action: Short description of the operation, used in messages.

    Raises:
        DuplicateResourceException: On a unique index violation.
        StoreException: On any other driver failure.
    """
    try:
        yield
    except DuplicateKeyError as e:
        msg = "A place with this ID already exists"
        raise DuplicateResourceException(msg) from e
    except PyMongoError as e:
        logger.error("Store failure while %s: %s", action, e)
        msg = f"Error while {action}"
        raise StoreException(msg, details={"error": str(e)}) from e
