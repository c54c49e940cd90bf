"""Packet types and the behaviour common to all MQTT v5 packets."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar, Iterable

from .buffer import BuffReader, BuffWriter
from .property import Property
from .types import BufferError, ErrorKind


class PacketType(IntEnum):
    """MQTT control packet types, numbered as in the fixed header."""

    RESERVED = 0
    CONNECT = 1
    CONNACK = 2
    PUBLISH = 3
    PUBACK = 4
    PUBREC = 5
    PUBREL = 6
    PUBCOMP = 7
    SUBSCRIBE = 8
    SUBACK = 9
    UNSUBSCRIBE = 10
    UNSUBACK = 11
    PINGREQ = 12
    PINGRESP = 13
    DISCONNECT = 14
    AUTH = 15

    @property
    def default_header(self) -> int:
        """The first byte of a packet of this type, with its mandatory flags."""
        flags = 0x02 if self in _FLAGGED else 0x00
        return (self.value << 4) | flags

    @classmethod
    def from_header(cls, byte: int) -> "PacketType":
        """The packet type named by the upper nibble of ``byte``."""
        return cls((byte >> 4) & 0x0F)


_FLAGGED = frozenset({PacketType.PUBREL, PacketType.SUBSCRIBE, PacketType.UNSUBSCRIBE})


@dataclass
class Packet:
    """State and shared encode/decode steps of an MQTT v5 packet.

    Subclasses set ``packet_type`` and override the encoding of the
    packet body. ``max_properties`` bounds how many properties are
    kept; ``None`` means no bound.
    """

    packet_type: ClassVar[PacketType | None] = None

    fixed_header: int | None = None
    remain_len: int = 0
    property_len: int = 0
    properties: list[Property] = field(default_factory=list)
    max_properties: int | None = None

    def __post_init__(self) -> None:
        if self.fixed_header is None:
            kind = type(self).packet_type
            self.fixed_header = kind.default_header if kind is not None else 0

    def _store(self, prop: Property) -> bool:
        if self.max_properties is not None and len(self.properties) >= self.max_properties:
            return False
        self.properties.append(prop)
        return True

    def decode_fixed_header(self, reader: BuffReader) -> PacketType:
        """Read the first byte and remaining length; return the packet type."""
        first = reader.read_u8()
        self.fixed_header = first
        self.remain_len = reader.read_variable_byte_int()
        return PacketType.from_header(first)

    def decode_properties(self, reader: BuffReader) -> None:
        """Read the property length and every property it covers."""
        self.property_len = reader.read_variable_byte_int()
        end = reader.position + self.property_len
        while reader.position < end:
            self._store(Property.decode(reader))
        if reader.position != end:
            raise BufferError(ErrorKind.DECODING_ERROR)

    def add_properties(self, properties: Iterable[Property]) -> int:
        """Keep the properties this packet allows; return the bytes they add.

        ``property_len`` grows by the same amount.
        """
        added = 0
        for prop in properties:
            if self.property_allowed(prop) and self._store(prop):
                added += prop.encoded_len() + 1
        self.property_len += added
        return added

    def property_allowed(self, prop: Property) -> bool:
        kind = type(self).packet_type
        return kind is not None and prop.allowed_in(kind)

    def _encode_body(self, writer: BuffWriter) -> None:
        """Write everything after the remaining length; empty by default."""

    def encode(self, buffer_len: int) -> bytes:
        """Encode the packet into at most ``buffer_len`` bytes."""
        body = BuffWriter(buffer_len)
        self._encode_body(body)
        writer = BuffWriter(buffer_len)
        writer.write_u8(self.fixed_header)
        writer.write_variable_byte_int(body.position)
        writer.insert_ref(body.getvalue())
        self.remain_len = body.position
        return writer.getvalue()

    def decode(self, reader: BuffReader) -> None:
        """Read the fixed header and check it names this packet's type."""
        kind = self.decode_fixed_header(reader)
        expected = type(self).packet_type
        if expected is not None and kind is not expected:
            raise BufferError(ErrorKind.PACKET_TYPE_MISMATCH)