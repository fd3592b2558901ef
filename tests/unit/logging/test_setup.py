import logging
import warnings

import pytest

from cfnplugin import config
from cfnplugin.logging import setup
from cfnplugin.logging.format import AddInvocationAttributes, InvocationFormatter


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


@pytest.mark.parametrize(
    "cfn_log,debug,expected",
    [
        (False, False, logging.INFO),
        (False, True, logging.DEBUG),
        ("warn", False, logging.WARNING),
        ("error", True, logging.ERROR),
        ("trace", False, logging.DEBUG),
    ],
)
def test_get_log_level_from_config(monkeypatch, cfn_log, debug, expected):
    monkeypatch.setattr(config, "CFN_LOG", cfn_log)
    monkeypatch.setattr(config, "DEBUG", debug)
    assert setup.get_log_level_from_config() == expected


def test_setup_logging(monkeypatch):
    monkeypatch.setattr(config, "CFN_LOG", False)

    setup.setup_logging(logging.DEBUG)

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, InvocationFormatter)
    assert any(isinstance(f, AddInvocationAttributes) for f in root.handlers[0].filters)
    assert logging.getLogger("cfnplugin").level == logging.DEBUG
    assert logging.getLogger("botocore").level == logging.ERROR


def test_setup_logging_leaves_warnings_alone():
    filters = list(warnings.filters)
    show_warning = warnings.showwarning

    setup.setup_logging(logging.INFO)

    assert warnings.filters == filters
    assert warnings.showwarning is show_warning


def test_setup_logging_from_config_with_trace(monkeypatch):
    monkeypatch.setattr(config, "CFN_LOG", "trace")

    setup.setup_logging_from_config()

    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("cfnplugin.handler.encoding").level == logging.DEBUG
    assert logging.getLogger("plux").level == logging.DEBUG
