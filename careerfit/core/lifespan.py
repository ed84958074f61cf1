from contextlib import asynccontextmanager
import logging

from careerfit.api.deps import close_stores
from careerfit.core.career_stages import known_career_stages

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    stages = known_career_stages()
    logger.info("career_stages_loaded stages=%s", list(stages))
    yield
    close_stores()
