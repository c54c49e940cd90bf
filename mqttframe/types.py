"""Value types shared by the MQTT v5 encoder and decoder."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ErrorKind(Enum):
    """Kinds of failure raised while reading or writing packets."""

    UTF8_ERROR = "Error encountered during UTF8 decoding!"
    INSUFFICIENT_BUFFER_SIZE = "Buffer size is not sufficient for packet!"
    VARIABLE_BYTE_INTEGER_ERROR = (
        "Error encountered during variable byte integer decoding / encoding!"
    )
    ID_NOT_FOUND = "Packet identifier not found!"
    ENCODING_ERROR = "Error encountered during packet encoding!"
    DECODING_ERROR = "Error encountered during packet decoding!"
    PACKET_TYPE_MISMATCH = (
        "Packet type not matched during decoding "
        "(Received different packet type than encode type)!"
    )
    WRONG_PACKET_TO_DECODE = (
        "Not able to decode packet, this packet is used just for sending "
        "to broker, not receiving by client!"
    )
    WRONG_PACKET_TO_ENCODE = (
        "Not able to encode packet, this packet is used only from server "
        "to client not the opposite way!"
    )
    PROPERTY_NOT_FOUND = "Property with ID not found!"

    @property
    def message(self) -> str:
        return self.value


class BufferError(Exception):
    """Raised when a packet cannot be read from or written to a buffer."""

    def __init__(self, kind: ErrorKind) -> None:
        super().__init__(kind.message)
        self.kind = kind

    def __repr__(self) -> str:
        return f"BufferError({self.kind.name})"


@dataclass(frozen=True)
class EncodedString:
    """A UTF-8 string prefixed on the wire by its two-byte length."""

    string: str = ""

    @property
    def length(self) -> int:
        """Number of UTF-8 bytes in the string."""
        return len(self.string.encode("utf-8"))

    def encoded_len(self) -> int:
        """Bytes taken on the wire, length prefix included."""
        return self.length + 2


@dataclass(frozen=True)
class BinaryData:
    """Binary data prefixed on the wire by its two-byte length."""

    data: bytes = b""

    @property
    def length(self) -> int:
        return len(self.data)

    def encoded_len(self) -> int:
        """Bytes taken on the wire, length prefix included."""
        return self.length + 2


@dataclass(frozen=True)
class StringPair:
    """A name/value pair of UTF-8 strings."""

    name: EncodedString = field(default_factory=EncodedString)
    value: EncodedString = field(default_factory=EncodedString)

    def encoded_len(self) -> int:
        return self.name.encoded_len() + self.value.encoded_len()


@dataclass(frozen=True)
class TopicFilter:
    """A topic filter with its subscription options byte."""

    filter: EncodedString = field(default_factory=EncodedString)
    sub_options: int = 0

    def encoded_len(self) -> int:
        """Bytes taken on the wire: the string plus the options byte."""
        return self.filter.length + 3