import logging

from applyflow.db.session import engine
from applyflow.db.base import Base
import applyflow.db.models  # noqa: F401  registers every table on Base.metadata

logger = logging.getLogger(__name__)


def init_db():
    """Create any missing tables directly from the ORM metadata."""
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ensured")
