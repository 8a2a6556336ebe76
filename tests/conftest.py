import logging
import os

import pytest

# Set test environment variables
os.environ["PLUGINHOST_ENVIRONMENT"] = "test"
os.environ["PLUGINHOST_LOG_LEVEL"] = "WARNING"


@pytest.fixture(autouse=True)
def _strip_file_handlers():
    """Remove file handlers from root logger so tests never write to logs/."""
    root = logging.getLogger()
    saved = [h for h in root.handlers if isinstance(h, logging.FileHandler)]
    for h in saved:
        root.removeHandler(h)
    yield
    # Restore any that were removed (and strip any new ones tests may have added)
    for h in list(root.handlers):
        if isinstance(h, logging.FileHandler):
            root.removeHandler(h)
    for h in saved:
        root.addHandler(h)


@pytest.fixture
def context():
    """A fresh host context with its own plugin registry."""
    from pluginhost.core.config import Settings
    from pluginhost.host import HostContext

    return HostContext(settings=Settings())


@pytest.fixture
def registry(context):
    return context.registry


@pytest.fixture
def session(context):
    return context.new_session()


@pytest.fixture
def manager(session):
    from pluginhost.plugins import PluginManager

    return PluginManager(session)
