"""Prepare a worker before it accepts traffic."""

import logging

from batch_engine.app.cache import warmup_cache
from batch_engine.app.db.session import init_db

logger = logging.getLogger(__name__)


def startup(app=None):
    """Create tables and prime the risk classification path. Call once per worker at process start."""
    init_db()
    warmup_cache()

    if app is not None:
        app.state.ready = True
    logger.info("Startup complete; ready to serve requests.")
