import logging

import pytest


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers the CLI attaches so they do not outlive the captured streams."""
    package_logger = logging.getLogger("exswallow")
    handlers = list(package_logger.handlers)
    propagate = package_logger.propagate
    level = package_logger.level
    yield
    for handler in list(package_logger.handlers):
        if handler not in handlers:
            package_logger.removeHandler(handler)
    package_logger.propagate = propagate
    package_logger.setLevel(level)
