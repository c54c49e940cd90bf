from dataclasses import dataclass

import pytest

from mqttframe.buffer import (
    BuffReader,
    BuffWriter,
    RemLenError,
    decode_variable_byte_int,
    encode_variable_byte_int,
    variable_byte_int_len,
)
from mqttframe.types import (
    BinaryData,
    BufferError,
    EncodedString,
    ErrorKind,
    StringPair,
    TopicFilter,
)


# Variable byte integer


def test_vbi_decode():
    assert decode_variable_byte_int(bytes([0x81, 0x81, 0x81, 0x01])) == 2113665


def test_vbi_decode_small():
    assert decode_variable_byte_int(bytes([0x81, 0x81, 0x01, 0x85])) == 16_513


def test_vbi_encode():
    res = encode_variable_byte_int(2_113_665)
    assert res == bytes([0x81, 0x81, 0x81, 0x01])
    assert variable_byte_int_len(res) == 4


def test_vbi_encode_small():
    res = encode_variable_byte_int(16_513)
    assert res == bytes([0x81, 0x81, 0x01, 0x00])
    assert variable_byte_int_len(res) == 3


def test_vbi_encode_extra_small():
    res = encode_variable_byte_int(5)
    assert res == bytes([0x05, 0x00, 0x00, 0x00])
    assert variable_byte_int_len(res) == 1


def test_vbi_encode_max():
    with pytest.raises(BufferError) as info:
        encode_variable_byte_int(288_435_455)
    assert info.value.kind is ErrorKind.ENCODING_ERROR


@pytest.mark.parametrize("value", [0, 127, 128, 16_383, 16_384, 2_097_151, 268_435_455])
def test_vbi_round_trip(value):
    assert decode_variable_byte_int(encode_variable_byte_int(value)) == value


# Reader


def _reader(data):
    return BuffReader(bytes(data), len(data))


def _expect_error(call, kind):
    with pytest.raises(BufferError) as info:
        call()
    assert info.value.kind is kind


def test_read_variable_byte():
    reader = _reader([0x82, 0x82, 0x03, 0x85, 0x84])
    assert reader.read_variable_byte_int() == 49410
    assert reader.position == 3


def test_read_variable_byte_invalid_size():
    reader = _reader([0x82, 0x82])
    _expect_error(reader.read_variable_byte_int, ErrorKind.INSUFFICIENT_BUFFER_SIZE)
    assert reader.position == 0


def test_read_smaller_var_int():
    reader = _reader([0x82, 0x02])
    assert reader.read_variable_byte_int() == 258
    assert reader.position == 2


def test_read_complete_var_int():
    reader = _reader([0x81, 0x81, 0x81, 0x01])
    assert reader.read_variable_byte_int() == 2113665
    assert reader.position == 4


def test_read_var_empty_buffer():
    reader = _reader([])
    _expect_error(reader.read_variable_byte_int, ErrorKind.INSUFFICIENT_BUFFER_SIZE)
    assert reader.position == 0


def test_read_u32():
    reader = _reader([0x00, 0x02, 0x5E, 0xC1])
    assert reader.read_u32() == 155329
    assert reader.position == 4


def test_read_u32_oob():
    reader = _reader([0x00, 0x02, 0x5E])
    _expect_error(reader.read_u32, ErrorKind.INSUFFICIENT_BUFFER_SIZE)
    assert reader.position == 0


def test_read_u16():
    reader = _reader([0x48, 0x5F])
    assert reader.read_u16() == 18527
    assert reader.position == 2


def test_read_u16_oob():
    reader = _reader([0x5E])
    _expect_error(reader.read_u16, ErrorKind.INSUFFICIENT_BUFFER_SIZE)
    assert reader.position == 0


def test_read_u8():
    reader = _reader([0xFD])
    assert reader.read_u8() == 253
    assert reader.position == 1


def test_read_u8_oob():
    reader = _reader([])
    _expect_error(reader.read_u8, ErrorKind.INSUFFICIENT_BUFFER_SIZE)
    assert reader.position == 0


def test_peek_u8_does_not_move():
    reader = _reader([0xFD, 0x01])
    assert reader.peek_u8() == 0xFD
    assert reader.position == 0


def test_read_string():
    reader = _reader([0x00, 0x04, 0xF0, 0x9F, 0x92, 0x96])
    result = reader.read_string()
    assert reader.position == 6
    assert result.string == "💖"
    assert result.length == 4


def test_read_string_utf8_wrong():
    reader = _reader([0x00, 0x03, 0xF0, 0x9F, 0x92])
    _expect_error(reader.read_string, ErrorKind.UTF8_ERROR)
    assert reader.position == 0


def test_read_string_oob():
    reader = _reader([0x00, 0x04, 0xF0, 0x9F, 0x92])
    _expect_error(reader.read_string, ErrorKind.INSUFFICIENT_BUFFER_SIZE)
    assert reader.position == 0


def test_read_binary():
    reader = _reader([0x00, 0x04, 0xFF, 0xEE, 0xDD, 0xCC])
    result = reader.read_binary()
    assert reader.position == 6
    assert result.data == bytes([0xFF, 0xEE, 0xDD, 0xCC])
    assert result.length == 4


def test_read_binary_oob():
    reader = _reader([0x00, 0x04, 0xFF, 0xEE, 0xDD])
    _expect_error(reader.read_binary, ErrorKind.INSUFFICIENT_BUFFER_SIZE)
    assert reader.position == 0


def test_read_string_pair():
    reader = _reader([0x00, 0x04, 0xF0, 0x9F, 0x98, 0x8E, 0x00, 0x03, 0xE2, 0x93, 0x87])
    pair = reader.read_string_pair()
    assert reader.position == 11
    assert pair.name.string == "😎"
    assert pair.name.length == 4
    assert pair.value.string == "Ⓡ"
    assert pair.value.length == 3


def test_read_string_pair_wrong_utf8():
    reader = _reader([0x00, 0x03, 0xF0, 0x9F, 0x92, 0x00, 0x04, 0xF0, 0x9F, 0x98, 0x8E])
    _expect_error(reader.read_string_pair, ErrorKind.UTF8_ERROR)
    assert reader.position == 0


def test_read_string_pair_oob():
    reader = _reader([0x00, 0x04, 0xF0, 0x9F, 0x98, 0x8E, 0x00, 0x04, 0xE2, 0x93, 0x87])
    _expect_error(reader.read_string_pair, ErrorKind.INSUFFICIENT_BUFFER_SIZE)
    assert reader.position == 0


def test_read_message_clamps_to_buffer():
    reader = _reader([0x01, 0x02, 0x03, 0x04])
    reader.increment_position(1)
    assert reader.read_message(3) == bytes([0x02, 0x03])
    assert reader.read_message(100) == bytes([0x02, 0x03, 0x04])
    assert reader.position == 1


# Writer


def test_write_ref():
    data = bytes([0x82, 0x82, 0x03, 0x85, 0x84])
    writer = BuffWriter(5)
    writer.insert_ref(data)
    assert writer.position == 5
    assert writer.getvalue() == data


def test_write_ref_oob():
    writer = BuffWriter(4)
    _expect_error(
        lambda: writer.insert_ref(bytes([0x82, 0x82, 0x03, 0x85, 0x84])),
        ErrorKind.INSUFFICIENT_BUFFER_SIZE,
    )
    assert writer.position == 0
    assert writer.getvalue() == b""


def test_write_u8():
    writer = BuffWriter(1)
    writer.write_u8(0xFA)
    assert writer.position == 1
    assert writer.getvalue() == bytes([0xFA])


def test_write_u8_oob():
    writer = BuffWriter(0)
    _expect_error(lambda: writer.write_u8(0xFA), ErrorKind.INSUFFICIENT_BUFFER_SIZE)
    assert writer.position == 0


def test_write_u16():
    writer = BuffWriter(2)
    writer.write_u16(0xFAED)
    assert writer.position == 2
    assert writer.getvalue() == bytes([0xFA, 0xED])


def test_write_u16_oob():
    writer = BuffWriter(1)
    _expect_error(lambda: writer.write_u16(0xFAED), ErrorKind.INSUFFICIENT_BUFFER_SIZE)
    assert writer.position == 0


def test_write_u32():
    writer = BuffWriter(4)
    writer.write_u32(0xFAEDCC09)
    assert writer.position == 4
    assert writer.getvalue() == bytes([0xFA, 0xED, 0xCC, 0x09])


def test_write_u32_oob():
    writer = BuffWriter(3)
    _expect_error(lambda: writer.write_u32(0xFAEDCC08), ErrorKind.INSUFFICIENT_BUFFER_SIZE)
    assert writer.position == 0


def test_write_string():
    writer = BuffWriter(6)
    writer.write_string(EncodedString("😎"))
    assert writer.position == 6
    assert writer.getvalue() == bytes([0x00, 0x04, 0xF0, 0x9F, 0x98, 0x8E])


def test_write_string_oob():
    writer = BuffWriter(5)
    _expect_error(
        lambda: writer.write_string(EncodedString("😎")), ErrorKind.INSUFFICIENT_BUFFER_SIZE
    )
    assert writer.position == 0


def test_write_bin():
    writer = BuffWriter(6)
    writer.write_binary(BinaryData(bytes([0xAB, 0xEF, 0x88, 0x43])))
    assert writer.position == 6
    assert writer.getvalue() == bytes([0x00, 0x04, 0xAB, 0xEF, 0x88, 0x43])


def test_write_bin_oob():
    writer = BuffWriter(5)
    _expect_error(
        lambda: writer.write_binary(BinaryData(bytes([0xAB, 0xEF, 0x88, 0x43]))),
        ErrorKind.INSUFFICIENT_BUFFER_SIZE,
    )
    assert writer.position == 0


def _name_pair():
    return StringPair(EncodedString("Name"), EncodedString("😎"))


def test_write_string_pair():
    writer = BuffWriter(12)
    writer.write_string_pair(_name_pair())
    assert writer.position == 12
    assert writer.getvalue() == bytes(
        [0x00, 0x04, 0x4E, 0x61, 0x6D, 0x65, 0x00, 0x04, 0xF0, 0x9F, 0x98, 0x8E]
    )


def test_write_string_pair_oob():
    writer = BuffWriter(10)
    _expect_error(
        lambda: writer.write_string_pair(_name_pair()), ErrorKind.INSUFFICIENT_BUFFER_SIZE
    )
    assert writer.position == 0


def test_write_var_byte():
    writer = BuffWriter(2)
    writer.write_variable_byte_int(512)
    assert writer.position == 2
    assert writer.getvalue() == bytes([0x80, 0x04])


def test_write_var_byte_oob():
    writer = BuffWriter(2)
    _expect_error(
        lambda: writer.write_variable_byte_int(453123), ErrorKind.INSUFFICIENT_BUFFER_SIZE
    )
    assert writer.position == 0


@dataclass
class _StubProperty:
    identifier: int
    value: object

    def encode(self, writer):
        if isinstance(self.value, EncodedString):
            writer.write_string(self.value)
        else:
            writer.write_binary(self.value)


def _properties():
    return [
        _StubProperty(0x08, EncodedString("Name")),
        _StubProperty(0x09, BinaryData(bytes([0x12, 0x34, 0x56]))),
    ]


def test_write_properties():
    writer = BuffWriter(13)
    writer.write_properties(_properties())
    assert writer.position == 13
    assert writer.getvalue() == bytes(
        [0x08, 0x00, 0x04, 0x4E, 0x61, 0x6D, 0x65, 0x09, 0x00, 0x03, 0x12, 0x34, 0x56]
    )


def test_write_properties_oob():
    writer = BuffWriter(10)
    _expect_error(
        lambda: writer.write_properties(_properties()), ErrorKind.INSUFFICIENT_BUFFER_SIZE
    )
    assert writer.position == 0


def _filters():
    return [
        TopicFilter(EncodedString("test"), 0xAE),
        TopicFilter(EncodedString("topic"), 0x22),
    ]


def test_write_filters():
    writer = BuffWriter(15)
    writer.write_topic_filters(_filters(), True)
    assert writer.position == 15
    assert writer.getvalue() == bytes(
        [0x00, 0x04, 0x74, 0x65, 0x73, 0x74, 0xAE, 0x00, 0x05, 0x74, 0x6F, 0x70, 0x69, 0x63, 0x22]
    )


def test_write_filters_oob():
    writer = BuffWriter(5)
    _expect_error(
        lambda: writer.write_topic_filters(_filters(), True),
        ErrorKind.INSUFFICIENT_BUFFER_SIZE,
    )
    assert writer.position == 0


def test_write_filters_without_options():
    writer = BuffWriter(13)
    writer.write_topic_filters(_filters(), False)
    assert writer.getvalue() == bytes(
        [0x00, 0x04, 0x74, 0x65, 0x73, 0x74, 0x00, 0x05, 0x74, 0x6F, 0x70, 0x69, 0x63]
    )


def test_get_n_byte():
    writer = BuffWriter(5)
    writer.insert_ref(bytes([0x82, 0x02, 0x03]))
    assert writer.get_n_byte(1) == 0x02
    assert writer.get_n_byte(4) == 0


@pytest.mark.parametrize(
    "written, expected",
    [
        ([0x82, 0x02, 0x03, 0x85, 0x84], [0x02, 0x00, 0x00, 0x00]),
        ([0x82, 0x82, 0x03, 0x85, 0x84], [0x82, 0x03, 0x00, 0x00]),
        ([0x82, 0x82, 0x83, 0x05, 0x84], [0x82, 0x83, 0x05, 0x00]),
        ([0x82, 0x82, 0x83, 0x85, 0x04], [0x82, 0x83, 0x85, 0x04]),
        ([0x82, 0x82, 0x83, 0x85, 0x84, 0x34], [0x82, 0x83, 0x85, 0x84]),
        ([0x82, 0x82, 0x83, 0x85, 0x04, 0x34], [0x82, 0x83, 0x85, 0x04]),
        ([0x82, 0x00, 0x83, 0x85, 0x04, 0x34], [0x00, 0x00, 0x00, 0x00]),
    ],
)
def test_get_rem_len(written, expected):
    writer = BuffWriter(len(written))
    writer.insert_ref(bytes(written))
    assert writer.get_rem_len() == bytes(expected)
    assert writer.position == len(written)


def test_get_rem_len_cont():
    writer = BuffWriter(6)
    writer.insert_ref(bytes([0x82, 0x81]))
    with pytest.raises(RemLenError):
        writer.get_rem_len()
    writer.insert_ref(bytes([0x82, 0x01]))
    assert writer.get_rem_len() == bytes([0x81, 0x82, 0x01, 0x00])
    assert writer.position == 4


def test_write_then_read_round_trip():
    writer = BuffWriter(64)
    writer.write_u8(7)
    writer.write_u16(0xFAED)
    writer.write_u32(0xFAEDCC09)
    writer.write_variable_byte_int(2_113_665)
    writer.write_string_pair(_name_pair())
    reader = BuffReader(writer.getvalue())
    assert reader.read_u8() == 7
    assert reader.read_u16() == 0xFAED
    assert reader.read_u32() == 0xFAEDCC09
    assert reader.read_variable_byte_int() == 2_113_665
    assert reader.read_string_pair() == _name_pair()
    assert reader.position == writer.position