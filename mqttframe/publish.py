"""The MQTT v5 PUBLISH packet and quality-of-service levels."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from .buffer import BuffReader, BuffWriter, encode_variable_byte_int, variable_byte_int_len
from .packet import Packet, PacketType
from .types import BufferError, EncodedString, ErrorKind

_QOS_MASK = 0x06


class QualityOfService(IntEnum):
    """QoS levels, valued as their bits in the PUBLISH fixed header."""

    QOS0 = 0
    QOS1 = 2
    QOS2 = 4
    INVALID = 3

    @classmethod
    def _missing_(cls, value: object) -> "QualityOfService":
        return cls.INVALID


@dataclass
class PublishPacket(Packet):
    """An application message sent to or received from the broker."""

    packet_type = PacketType.PUBLISH

    topic_name: EncodedString = field(default_factory=EncodedString)
    packet_identifier: int = 1
    message: bytes | None = None

    def add_topic_name(self, topic_name: str) -> None:
        self.topic_name = EncodedString(topic_name)

    def add_message(self, message: bytes) -> None:
        self.message = bytes(message)

    def add_qos(self, qos: QualityOfService) -> None:
        self.fixed_header |= int(qos)

    def add_retain(self, retain: bool) -> None:
        self.fixed_header |= int(bool(retain))

    def add_identifier(self, identifier: int) -> None:
        self.packet_identifier = identifier

    @property
    def _qos_bits(self) -> int:
        return self.fixed_header & _QOS_MASK

    def _encode_body(self, writer: BuffWriter) -> None:
        if self.message is None:
            raise BufferError(ErrorKind.ENCODING_ERROR)
        writer.write_string(self.topic_name)
        if self._qos_bits:
            writer.write_u16(self.packet_identifier)
        writer.write_variable_byte_int(self.property_len)
        writer.write_properties(self.properties)
        writer.insert_ref(self.message)

    def encode(self, buffer_len: int) -> bytes:
        """Encode the packet into at most ``buffer_len`` bytes."""
        return super().encode(buffer_len)

    def decode(self, reader: BuffReader) -> None:
        """Read a PUBLISH packet; the message is what follows the properties."""
        super().decode(reader)
        self.topic_name = reader.read_string()
        if self._qos_bits:
            self.packet_identifier = reader.read_u16()
        self.decode_properties(reader)
        header_len = variable_byte_int_len(encode_variable_byte_int(self.remain_len))
        total_len = header_len + 1 + self.remain_len
        self.message = reader.read_message(total_len)