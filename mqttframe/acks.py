"""MQTT v5 acknowledgement packets of the publish flow: PUBACK, PUBREC, PUBREL, PUBCOMP."""

from __future__ import annotations

from dataclasses import dataclass

from .buffer import BuffReader, BuffWriter
from .packet import Packet, PacketType


@dataclass
class _AckPacket(Packet):
    """Body shared by the publish acknowledgements.

    The body is a packet identifier, a reason code byte, the property
    length and the properties.
    """

    packet_identifier: int = 0
    reason_code: int = 0

    def _encode_body(self, writer: BuffWriter) -> None:
        writer.write_u16(self.packet_identifier)
        writer.write_u8(self.reason_code)
        writer.write_variable_byte_int(self.property_len)
        writer.write_properties(self.properties)

    def _decode_body(self, reader: BuffReader) -> None:
        self.packet_identifier = reader.read_u16()
        self.reason_code = reader.read_u8()
        self.decode_properties(reader)

    def encode(self, buffer_len: int) -> bytes:
        """Encode the packet into at most ``buffer_len`` bytes."""
        return super().encode(buffer_len)

    def decode(self, reader: BuffReader) -> None:
        """Read the packet, raising if the header names another type."""
        super().decode(reader)
        self._decode_body(reader)


@dataclass
class PubackPacket(_AckPacket):
    """Acknowledges a QoS 1 PUBLISH.

    On decoding, the reason code is absent when the remaining length is
    2, and the properties are absent when it is below 4.
    """

    packet_type = PacketType.PUBACK

    def _decode_body(self, reader: BuffReader) -> None:
        self.packet_identifier = reader.read_u16()
        if self.remain_len != 2:
            self.reason_code = reader.read_u8()
        if self.remain_len < 4:
            self.property_len = 0
        else:
            self.decode_properties(reader)

    def encode(self, buffer_len: int) -> bytes:
        """Encode the PUBACK into at most ``buffer_len`` bytes."""
        return super().encode(buffer_len)

    def decode(self, reader: BuffReader) -> None:
        """Read a PUBACK packet."""
        super().decode(reader)


@dataclass
class PubcompPacket(_AckPacket):
    """Completes a QoS 2 exchange."""

    packet_type = PacketType.PUBCOMP

    def encode(self, buffer_len: int) -> bytes:
        """Encode the PUBCOMP into at most ``buffer_len`` bytes."""
        return super().encode(buffer_len)

    def decode(self, reader: BuffReader) -> None:
        """Read a PUBCOMP packet."""
        super().decode(reader)


@dataclass
class PubrecPacket(_AckPacket):
    """Acknowledges receipt of a QoS 2 PUBLISH."""

    packet_type = PacketType.PUBREC

    def encode(self, buffer_len: int) -> bytes:
        """Encode the PUBREC into at most ``buffer_len`` bytes."""
        return super().encode(buffer_len)

    def decode(self, reader: BuffReader) -> None:
        """Read a PUBREC packet."""
        super().decode(reader)


@dataclass
class PubrelPacket(_AckPacket):
    """Releases a QoS 2 message.

    A new packet starts with a fixed header of 0; set it to
    ``PacketType.PUBREL.default_header`` before encoding.
    """

    packet_type = PacketType.PUBREL

    fixed_header: int | None = 0

    def encode(self, buffer_len: int) -> bytes:
        """Encode the PUBREL into at most ``buffer_len`` bytes."""
        return super().encode(buffer_len)

    def decode(self, reader: BuffReader) -> None:
        """Read a PUBREL packet."""
        super().decode(reader)