import pickle

import pytest

from kafkawire.errors import (
    CodecError,
    InvalidDurationError,
    InvalidSnappyError,
    KafkaCode,
    KafkaError,
    NoHostReachableError,
    NoTopicsAssignedError,
    ServerError,
    StringDecodeError,
    TopicPartitionError,
    UnexpectedEOFError,
    UnsupportedCompressionError,
    UnsupportedProtocolError,
)

DEFAULT_TEXTS = [
    "Unsupported protocol version",
    "Unsupported compression format",
    "Unexpected EOF",
    "Encoding/Decoding Error",
    "String decoding error",
    "No host reachable",
    "No topic assigned",
    "Invalid duration",
]


def _default_errors():
    return [
        UnsupportedProtocolError(),
        UnsupportedCompressionError(),
        UnexpectedEOFError(),
        CodecError(),
        StringDecodeError(),
        NoHostReachableError(),
        NoTopicsAssignedError(),
        InvalidDurationError(),
    ]


def _custom_errors(message):
    return [
        UnsupportedProtocolError(message),
        UnsupportedCompressionError(message),
        UnexpectedEOFError(message),
        CodecError(message),
        StringDecodeError(message),
        NoHostReachableError(message),
        NoTopicsAssignedError(message),
        InvalidDurationError(message),
    ]


def test_code_values_fixed_by_protocol():
    assert KafkaCode(-1) is KafkaCode.UNKNOWN
    assert KafkaCode(1) is KafkaCode.OFFSET_OUT_OF_RANGE
    assert KafkaCode(10) is KafkaCode.MESSAGE_SIZE_TOO_LARGE
    assert KafkaCode(35) is KafkaCode.UNSUPPORTED_VERSION


def test_codes_are_contiguous_from_one():
    looked_up = [KafkaCode(value).value for value in range(1, 36)]
    assert looked_up == list(range(1, 36))
    assert len(KafkaCode) == 36


def test_code_lookup_by_value_round_trips():
    for code in KafkaCode:
        assert KafkaCode(int(code)) is code


def test_code_label_is_camel_case():
    assert KafkaCode(1).label == "OffsetOutOfRange"
    assert str(KafkaCode(3)) == "UnknownTopicOrPartition"


def test_invalid_code_value_rejected():
    with pytest.raises(ValueError):
        KafkaCode(999)


def test_simple_errors_default_message():
    errors = _default_errors()
    assert [str(err) for err in errors] == DEFAULT_TEXTS
    assert all(isinstance(err, KafkaError) for err in errors)


def test_simple_errors_custom_message():
    assert [str(err) for err in _custom_errors("details")] == ["details"] * len(DEFAULT_TEXTS)


def test_server_error_carries_code():
    err = ServerError(KafkaCode.MESSAGE_SIZE_TOO_LARGE)
    assert err.code is KafkaCode.MESSAGE_SIZE_TOO_LARGE
    assert str(err) == "Kafka Error (MessageSizeTooLarge)"


def test_server_error_accepts_int_code():
    assert ServerError(3).code is KafkaCode.UNKNOWN_TOPIC_OR_PARTITION


def test_server_error_caught_as_kafka_error():
    err = ServerError(-1)
    assert err.code is KafkaCode.UNKNOWN
    assert str(err) == "Kafka Error (Unknown)"
    with pytest.raises(KafkaError) as info:
        raise err
    assert info.value is err


def test_topic_partition_error_fields():
    err = TopicPartitionError("my-topic", 2, KafkaCode.LEADER_NOT_AVAILABLE)
    assert err.topic == "my-topic"
    assert err.partition == 2
    assert err.code is KafkaCode.LEADER_NOT_AVAILABLE
    assert "my-topic" in str(err)
    assert "LeaderNotAvailable" in str(err)


def test_errors_survive_pickling():
    err = TopicPartitionError("t", 0, KafkaCode.CORRUPT_MESSAGE)
    copy = pickle.loads(pickle.dumps(err))
    assert (copy.topic, copy.partition, copy.code) == ("t", 0, KafkaCode.CORRUPT_MESSAGE)
    server = pickle.loads(pickle.dumps(ServerError(KafkaCode.INVALID_TOPIC)))
    assert server.code is KafkaCode.INVALID_TOPIC
    assert str(server) == str(ServerError(KafkaCode.INVALID_TOPIC))


def test_invalid_snappy_is_kafka_error():
    with pytest.raises(KafkaError):
        raise InvalidSnappyError("bad header")
    assert str(InvalidSnappyError("bad header")) == "bad header"