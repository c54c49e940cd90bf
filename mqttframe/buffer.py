"""Cursor-based reading and bounded writing of MQTT wire primitives."""

from __future__ import annotations

import logging
from typing import Iterable, Protocol

from .types import BinaryData, BufferError, EncodedString, ErrorKind, StringPair, TopicFilter

logger = logging.getLogger(__name__)

VARIABLE_BYTE_INT_MAX = 268_435_455
_VBI_WIDTH = 4


def encode_variable_byte_int(value: int) -> bytes:
    """Encode ``value`` as a variable byte integer, zero-padded to four bytes."""
    if not 0 <= value <= VARIABLE_BYTE_INT_MAX:
        raise BufferError(ErrorKind.ENCODING_ERROR)
    out = bytearray()
    while True:
        value, byte = divmod(value, 128)
        if value:
            byte |= 0x80
        out.append(byte)
        if not value:
            break
    return bytes(out.ljust(_VBI_WIDTH, b"\x00"))


def decode_variable_byte_int(data: bytes) -> int:
    """Decode a variable byte integer from the start of ``data``."""
    result = 0
    for index, byte in enumerate(data[:_VBI_WIDTH]):
        result |= (byte & 0x7F) << (7 * index)
        if not byte & 0x80:
            return result
    raise BufferError(ErrorKind.VARIABLE_BYTE_INTEGER_ERROR)


def variable_byte_int_len(encoded: bytes) -> int:
    """Number of bytes actually used by an encoded variable byte integer."""
    scanned = encoded[:_VBI_WIDTH]
    for count, byte in enumerate(scanned, start=1):
        if not byte & 0x80:
            return count
    return len(scanned)


class BuffReader:
    """Reads wire primitives from a byte buffer, keeping a cursor.

    A failed read leaves the cursor where it was.
    """

    def __init__(self, buffer: bytes, length: int | None = None) -> None:
        self._buffer = bytes(buffer)
        self._len = len(self._buffer) if length is None else min(length, len(self._buffer))
        self.position = 0

    def increment_position(self, increment: int) -> None:
        self.position += increment

    def _take(self, size: int) -> bytes:
        if self.position + size > self._len:
            raise BufferError(ErrorKind.INSUFFICIENT_BUFFER_SIZE)
        chunk = self._buffer[self.position : self.position + size]
        self.position += size
        return chunk

    def read_variable_byte_int(self) -> int:
        for offset in range(_VBI_WIDTH):
            index = self.position + offset
            if index >= self._len:
                raise BufferError(ErrorKind.INSUFFICIENT_BUFFER_SIZE)
            if not self._buffer[index] & 0x80:
                value = decode_variable_byte_int(self._buffer[self.position : index + 1])
                self.position = index + 1
                return value
        raise BufferError(ErrorKind.VARIABLE_BYTE_INTEGER_ERROR)

    def read_u32(self) -> int:
        """Read a big-endian unsigned 32-bit integer."""
        return int.from_bytes(self._take(4), "big")

    def read_u16(self) -> int:
        """Read a big-endian unsigned 16-bit integer."""
        return int.from_bytes(self._take(2), "big")

    def read_u8(self) -> int:
        return self._take(1)[0]

    def read_string(self) -> EncodedString:
        start = self.position
        raw = self._read_prefixed()
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError:
            self.position = start
            logger.error("Could not parse utf-8 string")
            raise BufferError(ErrorKind.UTF8_ERROR) from None
        return EncodedString(text)

    def read_binary(self) -> BinaryData:
        return BinaryData(self._read_prefixed())

    def _read_prefixed(self) -> bytes:
        start = self.position
        size = self.read_u16()
        try:
            return self._take(size)
        except BufferError:
            self.position = start
            raise

    def read_string_pair(self) -> StringPair:
        start = self.position
        name = self.read_string()
        try:
            value = self.read_string()
        except BufferError:
            self.position = start
            raise
        return StringPair(name, value)

    def read_message(self, total_len: int) -> bytes:
        """Return the bytes from the cursor up to ``total_len`` without moving."""
        end = min(total_len, self._len)
        return self._buffer[self.position : end]

    def peek_u8(self) -> int:
        if self.position >= self._len:
            raise BufferError(ErrorKind.INSUFFICIENT_BUFFER_SIZE)
        return self._buffer[self.position]


class RemLenError(ValueError):
    """The remaining-length field in a written packet is incomplete."""


class _WritableProperty(Protocol):
    identifier: int

    def encode(self, writer: "BuffWriter") -> None: ...


class BuffWriter:
    """Writes wire primitives into a buffer of fixed capacity.

    A failed write leaves the buffer as it was before the call.
    """

    def __init__(self, capacity: int) -> None:
        self.capacity = capacity
        self._buf = bytearray()

    @property
    def position(self) -> int:
        return len(self._buf)

    def _rewind(self, position: int) -> None:
        """Drop everything written after ``position``."""
        self._buf = self._buf[:position]

    def getvalue(self) -> bytes:
        """Return everything written so far."""
        return bytes(self._buf)

    def get_n_byte(self, n: int) -> int:
        """Return byte ``n`` of the output, or 0 if it is not written yet."""
        return self._buf[n] if n < self.position else 0

    def get_rem_len(self) -> bytes:
        """Return the remaining-length field following the first byte, padded to four bytes."""
        limit = 4 if self.position >= 5 else self.position - 1
        result = bytearray(_VBI_WIDTH)
        i = 1
        while True:
            byte = self._buf[i] if i < self.position else 0
            result[i - 1] = byte
            if not byte & 0x80:
                return bytes(result)
            if i == limit:
                if i != 4:
                    raise RemLenError("remaining length is not complete")
                return bytes(result)
            i += 1

    def insert_ref(self, data: bytes) -> None:
        """Append raw bytes."""
        if self.position + len(data) > self.capacity:
            raise BufferError(ErrorKind.INSUFFICIENT_BUFFER_SIZE)
        self._buf += data

    @staticmethod
    def _pack(value: int, size: int) -> bytes:
        try:
            return value.to_bytes(size, "big")
        except OverflowError:
            raise BufferError(ErrorKind.ENCODING_ERROR) from None

    def write_u8(self, byte: int) -> None:
        self.insert_ref(self._pack(byte, 1))

    def write_u16(self, value: int) -> None:
        self.insert_ref(self._pack(value, 2))

    def write_u32(self, value: int) -> None:
        self.insert_ref(self._pack(value, 4))

    def _write_prefixed(self, data: bytes) -> None:
        start = self.position
        self.write_u16(len(data))
        try:
            self.insert_ref(data)
        except BufferError:
            self._rewind(start)
            raise

    def write_string(self, string: EncodedString) -> None:
        self._write_prefixed(string.string.encode("utf-8"))

    def write_binary(self, binary: BinaryData) -> None:
        self._write_prefixed(bytes(binary.data))

    def write_string_pair(self, pair: StringPair) -> None:
        start = self.position
        self.write_string(pair.name)
        try:
            self.write_string(pair.value)
        except BufferError:
            self._rewind(start)
            raise

    def write_variable_byte_int(self, value: int) -> None:
        encoded = encode_variable_byte_int(value)
        self.insert_ref(encoded[: variable_byte_int_len(encoded)])

    def write_properties(self, properties: Iterable[_WritableProperty]) -> None:
        """Write each property as its identifier byte followed by its value."""
        start = self.position
        try:
            for prop in properties:
                self.write_u8(int(prop.identifier))
                prop.encode(self)
        except BufferError:
            self._rewind(start)
            raise

    def write_topic_filters(self, filters: Iterable[TopicFilter], sub: bool) -> None:
        """Write topic filters; the options byte is written only when ``sub`` is true."""
        start = self.position
        try:
            for topic_filter in filters:
                self.write_string(topic_filter.filter)
                if sub:
                    self.write_u8(topic_filter.sub_options)
        except BufferError:
            self._rewind(start)
            raise