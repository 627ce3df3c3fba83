"""Root conftest for all tests - setup sys.path for shared test builders."""

import sys
from pathlib import Path

import pytest

from tradeperf.system import LoggerFactory, LoggingConfig

# Add project root to sys.path so tests can import tests.builders
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


@pytest.fixture(autouse=True, scope="session")
def quiet_logging():
    """Keep test output readable; individual tests may reconfigure."""
    LoggerFactory.configure(LoggingConfig(level="WARNING"))
    yield
    LoggerFactory.reset()
