import pytest

from util import (ArgumentError, BufferTooSmall, CryptopalsError, Empty, ErrorKind, InvalidHex, OddDigits,
                  OddInput, OddLength, OutOfMemory, OutputOverflow, StreamError, describe_error, hex_decode,
                  hex_decode_into, hex_decode_to_text, hex_digit_value, hex_encode)


def test_hex_digit_value():
    assert [hex_digit_value(c) for c in "0123456789"] == list(range(10))
    assert [hex_digit_value(c) for c in "abcdef"] == list(range(10, 16))
    assert [hex_digit_value(c) for c in "ABCDEF"] == list(range(10, 16))
    for c in "gG /:@`\x00":
        assert hex_digit_value(c) == -1


def test_hex_decode():
    assert hex_decode("000102fe") == b"\x00\x01\x02\xfe"
    assert hex_decode("DeAdBeEf") == b"\xde\xad\xbe\xef"
    assert hex_decode("") == b""


def test_hex_round_trip_is_case_normalised():
    for h in ["", "00", "ff", "FF", "0aB1c2D3", "49276d206b696c6c696e67"]:
        assert hex_encode(hex_decode(h)) == h.lower()


def test_hex_encode_all_bytes():
    data = bytes(range(256))
    encoded = hex_encode(data)
    assert len(encoded) == 512
    assert encoded == data.hex()


def test_hex_decode_errors():
    with pytest.raises(OddLength):
        hex_decode("414")
    with pytest.raises(InvalidHex):
        hex_decode("zz")
    with pytest.raises(InvalidHex):
        hex_decode("41 42 ")
    with pytest.raises(ArgumentError):
        hex_decode(None)
    # Odd length is reported before bad digits
    with pytest.raises(OddLength):
        hex_decode("zzz")


def test_hex_decode_lenient_skips_whitespace():
    assert hex_decode(" 41\t42\r\n43 ", strict=False) == b"ABC"
    with pytest.raises(OddLength):
        hex_decode("41 4", strict=False)
    with pytest.raises(InvalidHex):
        hex_decode("41 4x", strict=False)


def test_hex_decode_into():
    buf = bytearray(3)
    assert hex_decode_into("4142", buf) == 2
    assert buf == bytearray(b"AB\x00")
    assert hex_decode_into("", bytearray()) == 0
    with pytest.raises(BufferTooSmall):
        hex_decode_into("414243", bytearray(2))
    with pytest.raises(ArgumentError):
        hex_decode_into("41", None)


def test_hex_decode_to_text():
    assert hex_decode_to_text("414243") == "ABC"
    assert hex_decode_to_text("80ff") == "\x80\xff"
    with pytest.raises(InvalidHex):
        hex_decode_to_text("4g")


def test_errors_are_value_errors_where_sensible():
    for cls in (ArgumentError, InvalidHex, OddLength, OddInput, BufferTooSmall, Empty):
        assert issubclass(cls, ValueError)
        assert issubclass(cls, CryptopalsError)
    assert issubclass(OutOfMemory, MemoryError)
    assert issubclass(StreamError, OSError)
    assert OddDigits is OddLength
    assert OutputOverflow is BufferTooSmall


def test_describe_error():
    assert describe_error(ErrorKind.OK) == "success"
    assert describe_error(ErrorKind.ARGUMENT) == "invalid arguments"
    assert describe_error(ErrorKind.INVALID_HEX) == "invalid hex digit"
    assert describe_error(ErrorKind.ODD_LENGTH) == "odd number of hex digits"
    assert describe_error(ErrorKind.ODD_INPUT) == "input length must be even (two equal buffers)"
    assert describe_error(ErrorKind.BUFFER_TOO_SMALL) == "output buffer too small"
    assert describe_error(ErrorKind.OUT_OF_MEMORY) == "out of memory"
    assert describe_error(ErrorKind.IO) == "I/O failure"
    assert describe_error(ErrorKind.EMPTY) == "empty input"
    assert describe_error(None) == "unknown error"


def test_every_kind_has_a_description():
    for kind in ErrorKind:
        assert describe_error(kind) != "unknown error"


def test_describe_error_from_exception():
    assert describe_error(OddInput("x")) == "input length must be even (two equal buffers)"
    assert describe_error(StreamError("x")) == "I/O failure"
    assert describe_error(RuntimeError("x")) == "unknown error"
