import json

import pytest
from typing_extensions import TypedDict

from cfnplugin.handler.encoding import decode, encode, encode_bytes
from cfnplugin.handler.errors import BODY_EMPTY, MARSHALING, CfnError, TypeConfigurationError
from tests.unit.handler.models import BucketModel, QueueModel


class TopicProperties(TypedDict, total=False):
    TopicName: str
    Tags: list[dict[str, str]]


def test_decode_dataclass():
    assert decode(b'{"Name":"bucket1"}', BucketModel) == BucketModel(Name="bucket1")


def test_decode_typed_dict():
    body = b'{"TopicName": "t1", "Tags": [{"Key": "k", "Value": "v"}]}'
    assert decode(body, TopicProperties) == {
        "TopicName": "t1",
        "Tags": [{"Key": "k", "Value": "v"}],
    }


def test_decode_converts_stringified_values():
    body = b'{"QueueName": "q1", "DelaySeconds": "10", "FifoQueue": "true"}'
    queue = decode(body, QueueModel)
    assert queue.delay_seconds == 10
    assert queue.fifo_queue is True


def test_decode_empty_body():
    with pytest.raises(CfnError) as e:
        decode(b"", BucketModel)
    assert e.value.code == BODY_EMPTY
    assert e.value.cause is None

    assert decode(b"", BucketModel, allow_empty=True) is None


@pytest.mark.parametrize(
    "body",
    [b'"not-an-object"', b"[1, 2]", b"{not json", b'{"QueueName": {"nested": 1}}', b"\xff\xfe"],
)
def test_decode_invalid_body(body):
    with pytest.raises(CfnError) as e:
        decode(body, QueueModel)
    assert e.value.code == MARSHALING
    assert e.value.message == "Unable to convert type"
    assert e.value.cause is not None
    assert e.value.__cause__ is e.value.cause


def test_decode_uses_error_class():
    with pytest.raises(TypeConfigurationError) as e:
        decode(b"42", QueueModel, error_class=TypeConfigurationError)
    assert e.value.code == MARSHALING


def test_decode_is_repeatable_with_different_models():
    body = b'{"Name": "bucket1", "QueueName": "q1"}'
    assert decode(body, BucketModel) == BucketModel(Name="bucket1")
    assert decode(body, QueueModel).queue_name == "q1"
    assert decode(body, dict) == {"Name": "bucket1", "QueueName": "q1"}
    assert decode(body, BucketModel) == BucketModel(Name="bucket1")


def test_encode_uses_aliases_and_drops_none():
    queue = QueueModel(QueueName="q1", DelaySeconds=5)
    assert encode(queue) == {"QueueName": "q1", "DelaySeconds": 5, "FifoQueue": False}
    assert encode(None) is None
    assert encode([BucketModel("a"), BucketModel("b")]) == [{"Name": "a"}, {"Name": "b"}]


@pytest.mark.parametrize(
    "body,model",
    [
        (b'{"Name": "bucket1"}', BucketModel),
        (b'{"QueueName": "q1", "DelaySeconds": "3", "Arn": "arn:aws:sqs:q1"}', QueueModel),
        (b'{"TopicName": "t1"}', TopicProperties),
    ],
)
def test_decoded_model_survives_reencoding(body, model):
    decoded = decode(body, model)
    assert decode(encode_bytes(decoded), model) == decoded


def test_encode_bytes():
    assert encode_bytes(None) == b""
    assert json.loads(encode_bytes(BucketModel("bucket1"))) == {"Name": "bucket1"}
