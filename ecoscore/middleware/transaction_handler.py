from sqlalchemy.orm import Session
from contextlib import contextmanager
from functools import wraps
import asyncio
import logging

logger = logging.getLogger(__name__)


@contextmanager
def _unit_of_work(db: Session, name: str):
    try:
        yield
        db.commit()
        logger.debug(f"Transaction committed in {name}")
    except Exception as e:
        db.rollback()
        logger.error(f"Transaction rolled back in {name}: {e}", exc_info=True)
        raise


def transactional(func):
    """
    Décorateur de transaction pour les méthodes de service (self.db)

    Commit si la méthode rend la main normalement, rollback puis relance
    sinon. Fonctionne sur les méthodes sync comme async.
    """

    @wraps(func)
    async def async_wrapper(self, *args, **kwargs):
        with _unit_of_work(self.db, f"{type(self).__name__}.{func.__name__}"):
            return await func(self, *args, **kwargs)

    @wraps(func)
    def sync_wrapper(self, *args, **kwargs):
        with _unit_of_work(self.db, f"{type(self).__name__}.{func.__name__}"):
            return func(self, *args, **kwargs)

    if asyncio.iscoroutinefunction(func):
        return async_wrapper
    return sync_wrapper
