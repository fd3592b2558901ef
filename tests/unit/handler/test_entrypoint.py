import logging

import pytest
from plux import PluginManager

from cfnplugin.handler.entrypoint import HandlerEntrypoint
from cfnplugin.handler.provider import NoResourceHandler, ResourceHandlerPlugin
from tests.unit.handler.test_provider import (
    BucketHandler,
    BucketHandlerPlugin,
    StaticPluginFinder,
)


def _no_session(credentials, region):
    return None


def _payload(action="CREATE", callback_context=None):
    return {
        "action": action,
        "awsAccountId": "000000000000",
        "region": "us-east-1",
        "resourceType": "Test::Storage::Bucket",
        "callbackContext": callback_context,
        "requestData": {
            "logicalResourceId": "MyBucket",
            "resourceProperties": {"Name": "bucket1"},
        },
    }


@pytest.fixture
def plugin_manager():
    return PluginManager(
        ResourceHandlerPlugin.namespace, finder=StaticPluginFinder(BucketHandlerPlugin)
    )


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


def test_for_resource_type(plugin_manager):
    entrypoint = HandlerEntrypoint.for_resource_type(
        "Test::Storage::Bucket", plugin_manager, session_factory=_no_session, configure_logging=False
    )

    assert isinstance(entrypoint.handler, BucketHandler)
    assert entrypoint.session_factory is _no_session


def test_for_unknown_resource_type(plugin_manager):
    with pytest.raises(NoResourceHandler):
        HandlerEntrypoint.for_resource_type("Test::Storage::Unknown", plugin_manager)


def test_invocations_until_success():
    entrypoint = HandlerEntrypoint(
        BucketHandler(), session_factory=_no_session, configure_logging=False
    )

    response = entrypoint(_payload(), context=None)
    assert response["status"] == "IN_PROGRESS"

    response = entrypoint(_payload(callback_context=response["callbackContext"]))
    assert response == {"status": "SUCCESS", "resourceModel": {"Name": "bucket1"}}


def test_logging_is_configured_once(monkeypatch):
    calls = []
    monkeypatch.setattr(
        "cfnplugin.handler.entrypoint.setup_logging_from_config", lambda: calls.append(1)
    )
    entrypoint = HandlerEntrypoint(BucketHandler(), session_factory=_no_session)

    entrypoint(_payload())
    entrypoint(_payload())

    assert calls == [1]


def test_logging_not_configured(monkeypatch):
    calls = []
    monkeypatch.setattr(
        "cfnplugin.handler.entrypoint.setup_logging_from_config", lambda: calls.append(1)
    )
    entrypoint = HandlerEntrypoint(
        BucketHandler(), session_factory=_no_session, configure_logging=False
    )

    entrypoint(_payload())

    assert calls == []


def test_invocation_logs_go_to_root_handler(restore_root_logger, capsys):
    entrypoint = HandlerEntrypoint(BucketHandler(), session_factory=_no_session)

    response = entrypoint(_payload("DELETE"))

    assert response["errorCode"] == "InternalFailure"
    err = capsys.readouterr().err
    assert " WARN --- [DELETE MyBucket] cfnplugin.handler.provider : Error handling DELETE" in err
