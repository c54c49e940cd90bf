"""MQTT v5 properties: identifiers, wire encoding and per-packet rules."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, IntEnum, auto
from typing import Any, Callable

from .buffer import (
    BuffReader,
    BuffWriter,
    encode_variable_byte_int,
    variable_byte_int_len,
)
from .types import BufferError, ErrorKind

logger = logging.getLogger(__name__)


class PropertyId(IntEnum):
    """Identifier byte of each MQTT v5 property."""

    RESERVED = 0x00
    PAYLOAD_FORMAT = 0x01
    MESSAGE_EXPIRY_INTERVAL = 0x02
    CONTENT_TYPE = 0x03
    RESPONSE_TOPIC = 0x08
    CORRELATION_DATA = 0x09
    SUBSCRIPTION_IDENTIFIER = 0x0B
    SESSION_EXPIRY_INTERVAL = 0x11
    ASSIGNED_CLIENT_IDENTIFIER = 0x12
    SERVER_KEEP_ALIVE = 0x13
    AUTHENTICATION_METHOD = 0x15
    AUTHENTICATION_DATA = 0x16
    REQUEST_PROBLEM_INFORMATION = 0x17
    WILL_DELAY_INTERVAL = 0x18
    REQUEST_RESPONSE_INFORMATION = 0x19
    RESPONSE_INFORMATION = 0x1A
    SERVER_REFERENCE = 0x1C
    REASON_STRING = 0x1F
    RECEIVE_MAXIMUM = 0x21
    TOPIC_ALIAS_MAXIMUM = 0x22
    TOPIC_ALIAS = 0x23
    MAXIMUM_QOS = 0x24
    RETAIN_AVAILABLE = 0x25
    USER_PROPERTY = 0x26
    MAXIMUM_PACKET_SIZE = 0x27
    WILDCARD_SUBSCRIPTION_AVAILABLE = 0x28
    SUBSCRIPTION_IDENTIFIER_AVAILABLE = 0x29
    SHARED_SUBSCRIPTION_AVAILABLE = 0x2A


class _Kind(Enum):
    BYTE = auto()
    TWO_BYTE = auto()
    FOUR_BYTE = auto()
    VARIABLE = auto()
    STRING = auto()
    BINARY = auto()
    PAIR = auto()


P = PropertyId

_KINDS: dict[PropertyId, _Kind] = {
    P.PAYLOAD_FORMAT: _Kind.BYTE,
    P.MESSAGE_EXPIRY_INTERVAL: _Kind.FOUR_BYTE,
    P.CONTENT_TYPE: _Kind.STRING,
    P.RESPONSE_TOPIC: _Kind.STRING,
    P.CORRELATION_DATA: _Kind.BINARY,
    P.SUBSCRIPTION_IDENTIFIER: _Kind.VARIABLE,
    P.SESSION_EXPIRY_INTERVAL: _Kind.FOUR_BYTE,
    P.ASSIGNED_CLIENT_IDENTIFIER: _Kind.STRING,
    P.SERVER_KEEP_ALIVE: _Kind.TWO_BYTE,
    P.AUTHENTICATION_METHOD: _Kind.STRING,
    P.AUTHENTICATION_DATA: _Kind.BINARY,
    P.REQUEST_PROBLEM_INFORMATION: _Kind.BYTE,
    P.WILL_DELAY_INTERVAL: _Kind.FOUR_BYTE,
    P.REQUEST_RESPONSE_INFORMATION: _Kind.BYTE,
    P.RESPONSE_INFORMATION: _Kind.STRING,
    P.SERVER_REFERENCE: _Kind.STRING,
    P.REASON_STRING: _Kind.STRING,
    P.RECEIVE_MAXIMUM: _Kind.TWO_BYTE,
    P.TOPIC_ALIAS_MAXIMUM: _Kind.TWO_BYTE,
    P.TOPIC_ALIAS: _Kind.TWO_BYTE,
    P.MAXIMUM_QOS: _Kind.BYTE,
    P.RETAIN_AVAILABLE: _Kind.BYTE,
    P.USER_PROPERTY: _Kind.PAIR,
    P.MAXIMUM_PACKET_SIZE: _Kind.FOUR_BYTE,
    P.WILDCARD_SUBSCRIPTION_AVAILABLE: _Kind.BYTE,
    P.SUBSCRIPTION_IDENTIFIER_AVAILABLE: _Kind.BYTE,
    P.SHARED_SUBSCRIPTION_AVAILABLE: _Kind.BYTE,
}

_FIXED_SIZES = {_Kind.BYTE: 1, _Kind.TWO_BYTE: 2, _Kind.FOUR_BYTE: 4}

_WRITERS: dict[_Kind, Callable[[BuffWriter, Any], None]] = {
    _Kind.BYTE: BuffWriter.write_u8,
    _Kind.TWO_BYTE: BuffWriter.write_u16,
    _Kind.FOUR_BYTE: BuffWriter.write_u32,
    _Kind.VARIABLE: BuffWriter.write_variable_byte_int,
    _Kind.STRING: BuffWriter.write_string,
    _Kind.BINARY: BuffWriter.write_binary,
    _Kind.PAIR: BuffWriter.write_string_pair,
}

_READERS: dict[_Kind, Callable[[BuffReader], Any]] = {
    _Kind.BYTE: BuffReader.read_u8,
    _Kind.TWO_BYTE: BuffReader.read_u16,
    _Kind.FOUR_BYTE: BuffReader.read_u32,
    _Kind.VARIABLE: BuffReader.read_variable_byte_int,
    _Kind.STRING: BuffReader.read_string,
    _Kind.BINARY: BuffReader.read_binary,
    _Kind.PAIR: BuffReader.read_string_pair,
}

_REASON_AND_USER = frozenset({P.REASON_STRING, P.USER_PROPERTY})

# Keyed by the MQTT control packet type number (upper nibble of the header).
_ALLOWED: dict[int, frozenset[PropertyId]] = {
    1: frozenset({
        P.SESSION_EXPIRY_INTERVAL, P.RECEIVE_MAXIMUM, P.MAXIMUM_PACKET_SIZE,
        P.TOPIC_ALIAS_MAXIMUM, P.REQUEST_RESPONSE_INFORMATION,
        P.REQUEST_PROBLEM_INFORMATION, P.USER_PROPERTY,
        P.AUTHENTICATION_METHOD, P.AUTHENTICATION_DATA,
    }),
    2: frozenset({
        P.SESSION_EXPIRY_INTERVAL, P.RECEIVE_MAXIMUM, P.MAXIMUM_QOS,
        P.MAXIMUM_PACKET_SIZE, P.ASSIGNED_CLIENT_IDENTIFIER,
        P.TOPIC_ALIAS_MAXIMUM, P.REASON_STRING, P.USER_PROPERTY,
        P.WILDCARD_SUBSCRIPTION_AVAILABLE, P.SUBSCRIPTION_IDENTIFIER_AVAILABLE,
        P.SHARED_SUBSCRIPTION_AVAILABLE, P.SERVER_KEEP_ALIVE,
        P.RESPONSE_INFORMATION, P.SERVER_REFERENCE,
        P.AUTHENTICATION_METHOD, P.AUTHENTICATION_DATA,
    }),
    3: frozenset({
        P.PAYLOAD_FORMAT, P.MESSAGE_EXPIRY_INTERVAL, P.TOPIC_ALIAS,
        P.RESPONSE_TOPIC, P.CORRELATION_DATA, P.USER_PROPERTY,
        P.SUBSCRIPTION_IDENTIFIER, P.CONTENT_TYPE,
    }),
    4: _REASON_AND_USER,
    5: _REASON_AND_USER,
    6: _REASON_AND_USER,
    7: _REASON_AND_USER,
    8: frozenset({P.SUBSCRIPTION_IDENTIFIER, P.USER_PROPERTY}),
    9: _REASON_AND_USER,
    10: frozenset({P.USER_PROPERTY}),
    11: _REASON_AND_USER,
    14: frozenset({
        P.SESSION_EXPIRY_INTERVAL, P.REASON_STRING, P.USER_PROPERTY,
        P.SERVER_REFERENCE,
    }),
    15: frozenset({
        P.AUTHENTICATION_METHOD, P.AUTHENTICATION_DATA, P.REASON_STRING,
        P.USER_PROPERTY,
    }),
}

_PINGREQ, _PINGRESP = 12, 13

del P


@dataclass(frozen=True)
class Property:
    """One MQTT v5 property: its identifier and its value.

    The value is an ``int`` for numeric properties, an ``EncodedString``,
    ``BinaryData`` or ``StringPair`` for the others, and ``None`` for
    the reserved identifier.
    """

    identifier: PropertyId
    value: Any = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "identifier", PropertyId(self.identifier))

    def allowed_in(self, packet: int) -> bool:
        """Whether this property may appear in the given packet type."""
        kind = int(packet)
        if kind in (_PINGREQ, _PINGRESP):
            logger.warning("ping packets carry no properties")
        return self.identifier in _ALLOWED.get(kind, frozenset())

    def encoded_len(self) -> int:
        """Bytes taken by the value on the wire, identifier byte excluded."""
        kind = _KINDS.get(self.identifier)
        if kind is None:
            return 0
        if kind in _FIXED_SIZES:
            return _FIXED_SIZES[kind]
        if kind is _Kind.VARIABLE:
            return variable_byte_int_len(encode_variable_byte_int(self.value))
        return self.value.encoded_len()

    def encode(self, writer: BuffWriter) -> None:
        """Write the value (not the identifier byte) to ``writer``."""
        kind = _KINDS.get(self.identifier)
        if kind is None:
            raise BufferError(ErrorKind.PROPERTY_NOT_FOUND)
        _WRITERS[kind](writer, self.value)

    @classmethod
    def decode(cls, reader: BuffReader) -> "Property":
        """Read an identifier byte and the value that follows it."""
        code = reader.read_u8()
        try:
            identifier = PropertyId(code)
        except ValueError:
            raise BufferError(ErrorKind.ID_NOT_FOUND) from None
        kind = _KINDS.get(identifier)
        if kind is None:
            raise BufferError(ErrorKind.ID_NOT_FOUND)
        return cls(identifier, _READERS[kind](reader))