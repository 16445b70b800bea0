import logging

import pytest

pytestmark = pytest.mark.unit

from lakestrat.pipeline import configure_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def test_configure_logging_installs_console_handler(make_config, restore_root_logger):
    configure_logging(make_config(log_level="debug"))
    root = restore_root_logger

    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    handler = root.handlers[0]
    assert isinstance(handler, logging.StreamHandler)
    assert handler.formatter._fmt == '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def test_import_does_not_configure_logging():
    # importing the package must not touch the root logger
    import lakestrat.pipeline  # noqa: F401

    assert not any(getattr(h, "formatter", None) is not None
                   and getattr(h.formatter, "_fmt", "").startswith("%(asctime)s - %(name)s")
                   for h in logging.getLogger().handlers)
