# campus_ops/main.py
import logging

from campus_ops.core.config import Settings, get_settings
from campus_ops.core.database import Base, engine
from campus_ops.core.observability import setup_logging

# Registers every table on Base.metadata
from campus_ops.booking import models as _booking_models  # noqa: F401
from campus_ops.comment import models as _comment_models  # noqa: F401
from campus_ops.facility import models as _facility_models  # noqa: F401
from campus_ops.ticket import models as _ticket_models  # noqa: F401
from campus_ops.user import models as _user_models  # noqa: F401

logger = logging.getLogger(__name__)


def init_hub() -> Settings:
    """Startup hook for the request layer: logging first, then the schema."""
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
    Base.metadata.create_all(bind=engine)
    logger.info(f"{settings.APP_NAME} {settings.APP_VERSION} ready")
    return settings
