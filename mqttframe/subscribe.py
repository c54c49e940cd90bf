"""MQTT v5 subscription packets: SUBSCRIBE, SUBACK, UNSUBSCRIBE, UNSUBACK."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .buffer import BuffReader, BuffWriter, encode_variable_byte_int, variable_byte_int_len
from .packet import Packet, PacketType
from .publish import QualityOfService
from .types import BufferError, EncodedString, ErrorKind, TopicFilter

logger = logging.getLogger(__name__)


def _packet_end(remain_len: int) -> int:
    """Offset just past a packet whose remaining length is ``remain_len``."""
    header_len = variable_byte_int_len(encode_variable_byte_int(remain_len))
    return remain_len + header_len + 1


@dataclass
class _FilterPacket(Packet):
    """A client-to-broker packet that carries a list of topic filters."""

    packet_identifier: int = 0
    topic_filters: list[TopicFilter] = field(default_factory=list)
    max_filters: int | None = None

    _with_options = True

    @property
    def topic_filter_len(self) -> int:
        """Number of topic filters held."""
        return len(self.topic_filters)

    def _append_filter(self, topic_filter: TopicFilter) -> None:
        if self.max_filters is not None and len(self.topic_filters) >= self.max_filters:
            return
        self.topic_filters.append(topic_filter)

    def _encode_body(self, writer: BuffWriter) -> None:
        if not self.topic_filters:
            raise BufferError(ErrorKind.ENCODING_ERROR)
        writer.write_u16(self.packet_identifier)
        writer.write_variable_byte_int(self.property_len)
        writer.write_properties(self.properties)
        writer.write_topic_filters(self.topic_filters, self._with_options)

    def decode(self, reader: BuffReader) -> None:
        """Client-to-broker packets are never decoded by the client."""
        logger.error("%s packet does not support decoding on client", type(self).__name__)
        raise BufferError(ErrorKind.WRONG_PACKET_TO_DECODE)


@dataclass
class SubscriptionPacket(_FilterPacket):
    """A SUBSCRIBE request: topic filters each with a subscription options byte."""

    packet_type = PacketType.SUBSCRIBE

    packet_identifier: int = 1

    def add_new_filter(self, topic_name: str, qos: QualityOfService) -> None:
        """Add a filter subscribing to ``topic_name`` at the given QoS."""
        options = int(QualityOfService(qos)) >> 1
        self._append_filter(TopicFilter(EncodedString(topic_name), options))

    def encode(self, buffer_len: int) -> bytes:
        """Encode the SUBSCRIBE into at most ``buffer_len`` bytes."""
        return super().encode(buffer_len)

    def decode(self, reader: BuffReader) -> None:
        """Always raises: a client does not receive SUBSCRIBE packets."""
        super().decode(reader)


@dataclass
class UnsubscriptionPacket(_FilterPacket):
    """An UNSUBSCRIBE request: topic filters without options bytes."""

    packet_type = PacketType.UNSUBSCRIBE

    _with_options = False

    def add_new_filter(self, topic_name: str) -> None:
        """Add a filter to unsubscribe from ``topic_name``."""
        self._append_filter(TopicFilter(EncodedString(topic_name), 0x01))

    def encode(self, buffer_len: int) -> bytes:
        """Encode the UNSUBSCRIBE into at most ``buffer_len`` bytes."""
        return super().encode(buffer_len)

    def decode(self, reader: BuffReader) -> None:
        """Always raises: a client does not receive UNSUBSCRIBE packets."""
        super().decode(reader)


@dataclass
class _ReasonsPacket(Packet):
    """A broker-to-client acknowledgement carrying a list of reason codes."""

    packet_identifier: int = 0
    reason_codes: list[int] = field(default_factory=list)
    max_reasons: int | None = None

    def _store_reason(self, code: int) -> None:
        if self.max_reasons is not None and len(self.reason_codes) >= self.max_reasons:
            return
        self.reason_codes.append(code)

    def _encode_body(self, writer: BuffWriter) -> None:
        logger.error("%s packet does not support encoding", type(self).__name__)
        raise BufferError(ErrorKind.WRONG_PACKET_TO_ENCODE)

    def read_reason_codes(self, reader: BuffReader) -> None:
        raise NotImplementedError

    def decode(self, reader: BuffReader) -> None:
        super().decode(reader)
        self.packet_identifier = reader.read_u16()
        self.decode_properties(reader)
        self.read_reason_codes(reader)


@dataclass
class SubackPacket(_ReasonsPacket):
    """Acknowledges a SUBSCRIBE with one reason code per filter.

    Reason codes beyond ``max_reasons`` are read but not kept.
    """

    packet_type = PacketType.SUBACK

    def read_reason_codes(self, reader: BuffReader) -> None:
        """Read reason codes up to the end of the packet."""
        end = _packet_end(self.remain_len)
        while reader.position < end:
            self._store_reason(reader.read_u8())

    def encode(self, buffer_len: int) -> bytes:
        """Always raises: a client does not send SUBACK packets."""
        return super().encode(buffer_len)

    def decode(self, reader: BuffReader) -> None:
        """Read a SUBACK packet."""
        super().decode(reader)


@dataclass
class UnsubackPacket(_ReasonsPacket):
    """Acknowledges an UNSUBSCRIBE with one reason code per filter.

    With ``max_reasons`` set, exactly that many codes are read; otherwise
    codes are read up to the end of the packet.
    """

    packet_type = PacketType.UNSUBACK

    def read_reason_codes(self, reader: BuffReader) -> None:
        if self.max_reasons is None:
            end = _packet_end(self.remain_len)
            while reader.position < end:
                self.reason_codes.append(reader.read_u8())
            return
        for _ in range(self.max_reasons):
            self.reason_codes.append(reader.read_u8())

    def encode(self, buffer_len: int) -> bytes:
        """Always raises: a client does not send UNSUBACK packets."""
        return super().encode(buffer_len)

    def decode(self, reader: BuffReader) -> None:
        """Read an UNSUBACK packet."""
        super().decode(reader)