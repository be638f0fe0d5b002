# kafkawire

Building blocks for talking to a Kafka cluster, in pure Python with no
third-party dependencies.

## Modules

- `kafkawire.codecs` – big-endian encoding and decoding of the protocol's
  primitive types. `encode_i8`, `encode_i16`, `encode_i32`, `encode_i64`
  return `bytes`; `encode_string` writes a 16-bit length prefix and UTF-8
  bytes, `encode_bytes` a 32-bit length prefix, `encode_array` a 32-bit
  count followed by each item, and `encode_strings` an array of strings.
  The `decode_*` counterparts (`decode_i8` … `decode_i64`, `decode_string`,
  `decode_bytes`, `decode_array`, `decode_strings`) read from a binary
  stream. A non-positive length prefix decodes to an empty value.
- `kafkawire.compression` – the `Compression` enum (`NONE`, `GZIP`,
  `SNAPPY`, valued as in the message attributes) and the gzip helpers
  `compress_gzip` and `uncompress_gzip`; the latter accepts bytes or a
  readable binary stream and raises `OSError` on invalid data.
- `kafkawire.snappy` – raw snappy block `compress`, `uncompress` and
  `decompress_len`, plus `SnappyReader` for chunked snappy streams (an
  8-byte magic header, version and compatibility fields, then chunks each
  prefixed by a 32-bit size). `validate_stream` checks that header and
  returns the bytes after it; only version 1 and compatibility 1 are
  accepted. `SnappyReader.read(size)` and `SnappyReader.read_to_end()`
  return uncompressed bytes.
- `kafkawire.assignment` – `Assignment` (a topic and its sorted,
  de-duplicated partitions; empty means all) and `Assignments`, ordered by
  topic name, built with `from_map`. `Assignments.topic_ref(topic)` gives an
  integer reference usable with `assignments[ref]`, or `None`.
- `kafkawire.records` – `Record` (with `from_key_value`, `from_value` and
  `with_partition`), `ProduceMessage.from_record` which turns keys and
  values into bytes (empty becomes `None`), `Partitions` and `Topics`
  describing the partitions known for each topic.
- `kafkawire.partitioner` – the abstract `Partitioner` and
  `DefaultPartitioner`: a message with a non-negative partition is left
  alone, a keyed message goes to `hash(key) % num_all_partitions` (hashed
  with `XxHash32` unless another hasher factory is given), and a key-less
  message is spread round robin over the available partitions.
- `kafkawire.errors` – the `KafkaCode` enum of broker error codes and the
  `KafkaError` exception family: `ServerError`, `TopicPartitionError`,
  `UnexpectedEOFError`, `CodecError`, `StringDecodeError`,
  `InvalidSnappyError` and others.

## Example

```python
import io

from kafkawire.codecs import encode_string, decode_string
from kafkawire.records import Record, ProduceMessage, Partitions, Topics
from kafkawire.partitioner import DefaultPartitioner

data = encode_string("test")          # b"\x00\x04test"
assert decode_string(io.BytesIO(data)) == "test"

topics = Topics({"events": Partitions(available_ids=[0, 1, 4], num_all_partitions=5)})
partitioner = DefaultPartitioner()

msg = ProduceMessage.from_record(Record.from_key_value("events", b"user-1", b"payload"))
partitioner.partition(topics, msg)
print(msg.partition)                  # stable for the same key
```

Decoding raises `UnexpectedEOFError` when a stream ends early; encoding
raises `CodecError` when a value does not fit its type or length prefix.

## What it does not do

This package holds no network code. It does not connect to brokers, fetch
metadata, or send and fetch messages: there is no producer or consumer
client, no offset committing and no TLS support. It provides the pieces
such a client is built from.

## Install

```
pip install kafkawire
```

## Running the tests

```
pip install -e ".[test]"
pytest
```