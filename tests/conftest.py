import logging

import pytest


@pytest.fixture(autouse=True)
def reset_cellforth_logger():
    """The CLI installs its own handler; undo that between tests."""
    yield
    log = logging.getLogger('cellforth')
    log.handlers[:] = []
    log.setLevel(logging.NOTSET)
    log.propagate = True
