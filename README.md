# mqttframe

A small library with no dependencies for building and parsing MQTT v5
packets as bytes.

## What it provides

- **Wire primitives** (`mqttframe.buffer`)
  - `BuffReader` reads the following from a byte buffer: big-endian
    `u8`/`u16`/`u32`, variable byte integers, UTF-8 strings, binary data
    and string pairs.
  - `BuffWriter` writes the same types, and topic filters as well, into a
    buffer of fixed capacity. `getvalue()` returns the bytes written so far.
  - If a read or write fails, the reader's cursor does not move and the
    writer's output does not change.
  - `encode_variable_byte_int`, `decode_variable_byte_int` and
    `variable_byte_int_len` work on the variable byte integer format
    directly. An encoded value is zero-padded to four bytes.
- **Value types** (`mqttframe.types`): `EncodedString`, `BinaryData`,
  `StringPair` and `TopicFilter`.
- **Properties** (`mqttframe.property`)
  - `Property` and `PropertyId` cover every MQTT v5 property.
  - `encode` writes the value of a property and `Property.decode` reads
    the identifier byte and then the value.
  - `encoded_len` gives the size of the value on the wire.
  - `allowed_in(packet_type)` tells whether a property may appear in a
    given packet type.
- **Packets**
  - `mqttframe.packet` holds `PacketType` and the base class `Packet`.
    - `add_properties` keeps only the properties that the packet type
      allows and adds their size to `property_len`.
    - `encode(buffer_len)` works out the remaining length and returns the
      packet as bytes.
    - The `max_properties` argument, when set, limits how many properties
      are kept.
  - `mqttframe.publish` holds `PublishPacket` and `QualityOfService`.
  - `mqttframe.acks` holds `PubackPacket`, `PubrecPacket`, `PubrelPacket`
    and `PubcompPacket`.
    - A new `PubrelPacket` starts with a fixed header of `0`. Set it to
      `PacketType.PUBREL.default_header` before you encode.
  - `mqttframe.subscribe` holds `SubscriptionPacket` and
    `UnsubscriptionPacket`, which the client sends. It also holds
    `SubackPacket` and `UnsubackPacket`, which the client receives.
    - Each of these packets can only be encoded or only be decoded,
      depending on its direction. Using the wrong one raises `BufferError`.
- **Reason codes** (`mqttframe.reason_codes`)
  - `ReasonCode.from_byte` maps a received byte to a code.
  - A byte that matches no code becomes `NETWORK_ERROR`. The
    connection-rate code `0x9F` is also read as `NETWORK_ERROR`.
  - `description()` gives a readable explanation of the code.
- **Identifier counter** (`mqttframe.rng`): `CountingRng` counts upward
  and wraps to 1 after 65535.

## Installation

```
pip install mqttframe
```

## Encoding a PUBLISH packet

```python
from mqttframe.property import Property, PropertyId
from mqttframe.publish import PublishPacket, QualityOfService

packet = PublishPacket()
packet.add_qos(QualityOfService.QOS1)
packet.add_topic_name("test")
packet.add_identifier(23432)
packet.add_properties([
    Property(PropertyId.PAYLOAD_FORMAT, 0x01),
    Property(PropertyId.MESSAGE_EXPIRY_INTERVAL, 45678),
])
packet.add_message(b"Hello world")
data = packet.encode(100)   # 29 bytes, starting 0x32 0x1B
```

## Decoding a packet

```python
from mqttframe.buffer import BuffReader
from mqttframe.publish import PublishPacket

packet = PublishPacket()
packet.decode(BuffReader(data))
print(packet.topic_name.string, packet.packet_identifier, packet.message)
```

If the fixed header names a different packet type, `decode` raises
`BufferError` with `ErrorKind.PACKET_TYPE_MISMATCH`.

## Subscribing

```python
from mqttframe.buffer import BuffReader
from mqttframe.publish import QualityOfService
from mqttframe.subscribe import SubackPacket, SubscriptionPacket

request = SubscriptionPacket(packet_identifier=5432)
request.add_new_filter("test/topic", QualityOfService.QOS0)
request.add_new_filter("hehe/#", QualityOfService.QOS1)
wire = request.encode(64)

ack = SubackPacket()
ack.decode(BuffReader(received_bytes))
print(ack.packet_identifier, ack.reason_codes)
```

## Errors

Failures raise `mqttframe.types.BufferError`. Its `kind` attribute holds an
`ErrorKind`, such as `ErrorKind.INSUFFICIENT_BUFFER_SIZE`,
`ErrorKind.UTF8_ERROR`, `ErrorKind.PACKET_TYPE_MISMATCH`,
`ErrorKind.WRONG_PACKET_TO_ENCODE` or `ErrorKind.WRONG_PACKET_TO_DECODE`.

`BuffWriter.get_rem_len` raises `RemLenError` when the remaining-length
field written so far is incomplete.

## What it does not do

- mqttframe is a codec only. It does not open network connections, keep
  sessions, handle keep-alive or retry anything.
- `PacketType` names every control packet type, but the only packet classes
  are those for PUBLISH, the publish acknowledgements, and
  SUBSCRIBE/SUBACK/UNSUBSCRIBE/UNSUBACK. There are no classes for CONNECT,
  CONNACK, DISCONNECT, PINGREQ, PINGRESP or AUTH.

## Running the tests

```
pip install -e ".[test]"
pytest
```