" generic fixtures "
import logging
from pathlib import Path

import pytest

from bsplayout.models import Configuration, Layout

SAMPLE_CONFIG = Path(__file__).parent / "sample_config.yaml"


def pytest_configure():
    "Runs once before all"
    from bsplayout.logging_setup import init_logger

    init_logger("/dev/null", force_debug=True)


@pytest.fixture
def test_log():
    """Provide a silent logger for tests."""
    logger = logging.getLogger("test_bsplayout")
    logger.handlers.clear()
    logger.addHandler(logging.NullHandler())
    logger.propagate = False
    return logger


@pytest.fixture
def sample_config_path():
    return SAMPLE_CONFIG


@pytest.fixture
def docked():
    "Laptop + external screen"
    return Configuration(
        name="docked",
        monitors=["eDP-1", "DP-1"],
        layouts=[
            Layout("DP-1", ["web", "code", "chat"]),
            Layout("eDP-1", ["music", "mail"]),
        ],
    )
