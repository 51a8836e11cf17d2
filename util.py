import string
from enum import Enum
from typing import Generator, Optional, Union


class ErrorKind(Enum):
    OK = 0
    ARGUMENT = 1
    INVALID_HEX = 2
    ODD_LENGTH = 3
    ODD_INPUT = 4
    BUFFER_TOO_SMALL = 5
    OUT_OF_MEMORY = 6
    IO = 7
    EMPTY = 8


_ERROR_DESCRIPTIONS = {
    ErrorKind.OK: "success",
    ErrorKind.ARGUMENT: "invalid arguments",
    ErrorKind.INVALID_HEX: "invalid hex digit",
    ErrorKind.ODD_LENGTH: "odd number of hex digits",
    ErrorKind.ODD_INPUT: "input length must be even (two equal buffers)",
    ErrorKind.BUFFER_TOO_SMALL: "output buffer too small",
    ErrorKind.OUT_OF_MEMORY: "out of memory",
    ErrorKind.IO: "I/O failure",
    ErrorKind.EMPTY: "empty input",
}


class CryptopalsError(Exception):
    kind: ErrorKind = ErrorKind.ARGUMENT


class ArgumentError(CryptopalsError, ValueError):
    kind = ErrorKind.ARGUMENT


class InvalidHex(CryptopalsError, ValueError):
    kind = ErrorKind.INVALID_HEX


class OddLength(CryptopalsError, ValueError):
    kind = ErrorKind.ODD_LENGTH


class OddInput(CryptopalsError, ValueError):
    kind = ErrorKind.ODD_INPUT


class BufferTooSmall(CryptopalsError, ValueError):
    kind = ErrorKind.BUFFER_TOO_SMALL


class OutOfMemory(CryptopalsError, MemoryError):
    kind = ErrorKind.OUT_OF_MEMORY


class StreamError(CryptopalsError, OSError):
    kind = ErrorKind.IO


class Empty(CryptopalsError, ValueError):
    kind = ErrorKind.EMPTY


# Names used by the streaming Base64 path
OddDigits = OddLength
OutputOverflow = BufferTooSmall


def describe_error(error: Union[ErrorKind, BaseException, None]) -> str:
    """
    Map an ErrorKind (or an exception carrying one) to a human-readable description

    >>> describe_error(ErrorKind.ODD_LENGTH)
    'odd number of hex digits'
    >>> describe_error(InvalidHex("bad"))
    'invalid hex digit'
    >>> describe_error(KeyError("nope"))
    'unknown error'
    """
    if isinstance(error, BaseException):
        error = getattr(error, "kind", None)
    return _ERROR_DESCRIPTIONS.get(error, "unknown error")


_HEX_DIGITS = frozenset(string.hexdigits)
_WHITESPACE = frozenset(string.whitespace)


def hex_digit_value(c: str) -> int:
    """
    Return the value (0-15) of a single hex digit, or -1 if c isn't one

    >>> [hex_digit_value(c) for c in "09afAF"]
    [0, 9, 10, 15, 10, 15]
    >>> hex_digit_value("g")
    -1
    """
    if len(c) != 1 or c not in _HEX_DIGITS:
        return -1
    return int(c, 16)


def _clean_hex(hex: Optional[str], strict: bool) -> str:
    if hex is None:
        raise ArgumentError("hex input is required")
    if not strict:
        hex = "".join(c for c in hex if c not in _WHITESPACE)
    if len(hex) % 2:
        raise OddLength(f"Odd number of hex digits ({len(hex)})")
    for i, c in enumerate(hex):
        if c not in _HEX_DIGITS:
            raise InvalidHex(f"Invalid hex character {c!r} at offset {i}")
    return hex


def hex_decode(hex: Optional[str], strict: bool = True) -> bytes:
    """
    Decode a hex string to bytes

    Strict decoding treats whitespace as an invalid character. Non-strict decoding skips it.

    >>> hex_decode("49276D20")
    b"I'm "
    >>> hex_decode("49 27 6d\\n20", strict=False)
    b"I'm "
    >>> hex_decode("")
    b''
    >>> hex_decode("414")
    Traceback (most recent call last):
    util.OddLength: Odd number of hex digits (3)
    >>> hex_decode("zz")
    Traceback (most recent call last):
    util.InvalidHex: Invalid hex character 'z' at offset 0
    """
    return bytes.fromhex(_clean_hex(hex, strict))


def hex_decode_into(hex: Optional[str], buf, strict: bool = True) -> int:
    """
    Decode a hex string into the writable buffer buf, returning the number of bytes written

    >>> buf = bytearray(4)
    >>> hex_decode_into("4142", buf)
    2
    >>> buf
    bytearray(b'AB\\x00\\x00')
    >>> hex_decode_into("414243", bytearray(2))
    Traceback (most recent call last):
    util.BufferTooSmall: Need 3 bytes but the buffer holds 2
    """
    decoded = hex_decode(hex, strict=strict)
    if buf is None:
        raise ArgumentError("Destination buffer is required")
    if len(decoded) > len(buf):
        raise BufferTooSmall(f"Need {len(decoded)} bytes but the buffer holds {len(buf)}")
    buf[:len(decoded)] = decoded
    return len(decoded)


def hex_encode(data: Optional[bytes]) -> str:
    """
    Encode bytes as lowercase hex, two digits per byte

    >>> hex_encode(b"\\x00\\xab\\xff")
    '00abff'
    >>> hex_encode(b"")
    ''
    """
    if data is None:
        raise ArgumentError("data is required")
    return bytes(data).hex()


def hex_decode_to_text(hex: Optional[str]) -> str:
    """
    Decode hex and interpret each byte as the character with the same code point. No UTF-8 validation is done

    >>> hex_decode_to_text("414243")
    'ABC'
    >>> hex_decode_to_text("ff41")
    'ÿA'
    """
    return hex_decode(hex).decode("latin-1")


def chunkify(b: bytes, chunk_size: int) -> Generator[bytes, None, None]:
    """
    Yield chunk_size sized chunks from b

    >>> list(chunkify(b"ABCD", 2))
    [b'AB', b'CD']

    >>> list(chunkify(b"ABCDE", 2))
    [b'AB', b'CD', b'E']
    """
    for i in range(0, len(b), chunk_size):
        yield b[i:i + chunk_size]
