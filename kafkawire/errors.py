"""Exceptions raised by the client and the error codes reported by brokers."""

from __future__ import annotations

import enum


class KafkaCode(enum.IntEnum):
    """Error codes reported by a remote Kafka server."""

    UNKNOWN = -1
    OFFSET_OUT_OF_RANGE = 1
    CORRUPT_MESSAGE = 2
    UNKNOWN_TOPIC_OR_PARTITION = 3
    INVALID_MESSAGE_SIZE = 4
    LEADER_NOT_AVAILABLE = 5
    NOT_LEADER_FOR_PARTITION = 6
    REQUEST_TIMED_OUT = 7
    BROKER_NOT_AVAILABLE = 8
    REPLICA_NOT_AVAILABLE = 9
    MESSAGE_SIZE_TOO_LARGE = 10
    STALE_CONTROLLER_EPOCH = 11
    OFFSET_METADATA_TOO_LARGE = 12
    NETWORK_EXCEPTION = 13
    GROUP_LOAD_IN_PROGRESS = 14
    GROUP_COORDINATOR_NOT_AVAILABLE = 15
    NOT_COORDINATOR_FOR_GROUP = 16
    INVALID_TOPIC = 17
    RECORD_LIST_TOO_LARGE = 18
    NOT_ENOUGH_REPLICAS = 19
    NOT_ENOUGH_REPLICAS_AFTER_APPEND = 20
    INVALID_REQUIRED_ACKS = 21
    ILLEGAL_GENERATION = 22
    INCONSISTENT_GROUP_PROTOCOL = 23
    INVALID_GROUP_ID = 24
    UNKNOWN_MEMBER_ID = 25
    INVALID_SESSION_TIMEOUT = 26
    REBALANCE_IN_PROGRESS = 27
    INVALID_COMMIT_OFFSET_SIZE = 28
    TOPIC_AUTHORIZATION_FAILED = 29
    GROUP_AUTHORIZATION_FAILED = 30
    CLUSTER_AUTHORIZATION_FAILED = 31
    INVALID_TIMESTAMP = 32
    UNSUPPORTED_SASL_MECHANISM = 33
    ILLEGAL_SASL_STATE = 34
    UNSUPPORTED_VERSION = 35

    @property
    def label(self) -> str:
        """The code's name in CamelCase, e.g. ``OffsetOutOfRange``."""
        return "".join(part.capitalize() for part in self.name.split("_"))

    def __str__(self) -> str:
        return self.label


class KafkaError(Exception):
    """Base class of all errors raised by this package."""

    description = "Kafka client error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message if message is not None else self.description)


class ServerError(KafkaError):
    """An error as reported by a remote Kafka server."""

    description = "Kafka Error"

    def __init__(self, code: KafkaCode) -> None:
        self.code = KafkaCode(code)
        super().__init__(f"Kafka Error ({self.code.label})")

    def __reduce__(self):
        return (type(self), (self.code,))


class TopicPartitionError(KafkaError):
    """A server error for a request on a particular topic and partition."""

    description = "Error in request for topic and partition"

    def __init__(self, topic: str, partition: int, code: KafkaCode) -> None:
        self.topic = topic
        self.partition = partition
        self.code = KafkaCode(code)
        super().__init__(
            f'Topic Partition Error ("{topic}", {partition}, {self.code.label})'
        )

    def __reduce__(self):
        return (type(self), (self.topic, self.partition, self.code))


class UnsupportedProtocolError(KafkaError):
    """The server speaks a newer protocol version than supported here."""

    description = "Unsupported protocol version"


class UnsupportedCompressionError(KafkaError):
    """The data uses a compression format that is not supported."""

    description = "Unsupported compression format"


class UnexpectedEOFError(KafkaError):
    """Too few bytes were available to decode a response."""

    description = "Unexpected EOF"


class CodecError(KafkaError):
    """A request or response could not be encoded or decoded."""

    description = "Encoding/Decoding Error"


class StringDecodeError(KafkaError):
    """Bytes could not be decoded as a valid UTF-8 string."""

    description = "String decoding error"


class NoHostReachableError(KafkaError):
    """None of the configured hosts could be reached."""

    description = "No host reachable"


class NoTopicsAssignedError(KafkaError):
    """A consumer was set up without any topic to consume."""

    description = "No topic assigned"


class InvalidDurationError(KafkaError):
    """A user-provided duration is out of range."""

    description = "Invalid duration"


class InvalidSnappyError(KafkaError):
    """Snappy compressed data could not be encoded or decoded."""

    description = "Invalid snappy data"