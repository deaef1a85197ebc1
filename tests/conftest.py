import logging

import pytest

from particle_sim.config import SimConfig


@pytest.fixture(autouse=True)
def restore_app_logger():
    """setup_logging() mutates the process-wide 'particle_sim' logger; undo it."""
    logger = logging.getLogger("particle_sim")
    level, propagate, handlers = logger.level, logger.propagate, list(logger.handlers)
    yield
    for h in logger.handlers:
        if h not in handlers:
            h.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.fixture
def zero_g_config():
    """Default arena and coefficients, gravity switched off."""
    return SimConfig(gravity_acceleration=0.0)
