"""Test fixtures for pytest."""

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_progress_logger():
    """Undo handlers and levels set by configure_logging so tests stay isolated."""
    progress = logging.getLogger("simcore.progress")
    root = logging.getLogger()
    handlers = list(progress.handlers)
    propagate = progress.propagate
    level = progress.level
    root_level = root.level
    yield
    for handler in list(progress.handlers):
        if handler not in handlers:
            progress.removeHandler(handler)
    progress.propagate = propagate
    progress.setLevel(level)
    root.setLevel(root_level)
