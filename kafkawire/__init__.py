"""Kafka wire-protocol primitives: codecs, gzip and snappy compression, assignments and partitioning."""

__version__ = "0.1.0"

__all__ = [
    "assignment",
    "codecs",
    "compression",
    "errors",
    "partitioner",
    "records",
    "snappy",
]