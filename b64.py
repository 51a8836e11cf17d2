from typing import Optional, TextIO

from util import ArgumentError, InvalidHex, OddDigits, StreamError, chunkify, hex_decode, hex_digit_value

BASE64_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
PAD = "="
CHUNK_SIZE = 4096


def encode_base64_block(group: bytes) -> str:
    """
    Encode a group of 1-3 bytes as 4 Base64 characters, padding with '=' as needed

    >>> encode_base64_block(b"Man"), encode_base64_block(b"Ma"), encode_base64_block(b"M")
    ('TWFu', 'TWE=', 'TQ==')
    """
    n = len(group)
    if not 1 <= n <= 3:
        raise ArgumentError(f"Base64 groups are 1-3 bytes, got {n}")

    triple = group[0] << 16
    if n > 1:
        triple |= group[1] << 8
    if n > 2:
        triple |= group[2]

    return (BASE64_ALPHABET[(triple >> 18) & 0x3f]
            + BASE64_ALPHABET[(triple >> 12) & 0x3f]
            + (BASE64_ALPHABET[(triple >> 6) & 0x3f] if n > 1 else PAD)
            + (BASE64_ALPHABET[triple & 0x3f] if n > 2 else PAD))


def base64_encode(data: Optional[bytes]) -> str:
    """
    Return the Base64 encoding of data, terminated by a newline

    >>> base64_encode(b"any carnal pleas")
    'YW55IGNhcm5hbCBwbGVhcw==\\n'
    >>> base64_encode(b"")
    '\\n'
    """
    if data is None:
        raise ArgumentError("data is required")
    return "".join(encode_base64_block(group) for group in chunkify(data, 3)) + "\n"


def hex2b64(hex: str) -> str:
    """
    Decodes hex to bytes and returns a base64 representation of those bytes. Whitespace in hex is ignored

    >>> hex2b64('49276d206b696c6c696e6720796f757220627261696e206c696b65206120706f69736f6e6f7573206d757368726f6f6d')
    'SSdtIGtpbGxpbmcgeW91ciBicmFpbiBsaWtlIGEgcG9pc29ub3VzIG11c2hyb29t\\n'
    """
    return base64_encode(hex_decode(hex, strict=False))


def hex2b64_stream(infile: TextIO, outfile: TextIO, chunk_size: int = CHUNK_SIZE) -> int:
    """
    Read hex text from infile and write its Base64 encoding to outfile, followed by a newline

    Whitespace is skipped. Each complete group of 3 bytes is written as soon as it's decoded, so output produced
    before an error in the input stays written. Returns the number of characters written

    >>> import io
    >>> out = io.StringIO()
    >>> hex2b64_stream(io.StringIO("48 65 6c 6c 6f 20\\n77 6f 72 6c 64\\n"), out)
    17
    >>> out.getvalue()
    'SGVsbG8gd29ybGQ=\\n'
    >>> hex2b64_stream(io.StringIO("48656c6c6f7"), io.StringIO())
    Traceback (most recent call last):
    util.OddLength: Odd number of hex digits (incomplete byte at end of input)
    """
    if infile is None or outfile is None:
        raise ArgumentError("Both streams are required")
    if chunk_size <= 0:
        raise ArgumentError("chunk_size must be > 0")

    written = 0

    def emit(s: str) -> None:
        nonlocal written
        try:
            outfile.write(s)
        except OSError as e:
            raise StreamError(f"Failed to write output: {e}") from e
        written += len(s)

    high_nibble = -1  # -1 means no pending half-byte
    group = bytearray()
    offset = 0

    while True:
        try:
            chunk = infile.read(chunk_size)
        except OSError as e:
            raise StreamError(f"Failed to read input: {e}") from e
        if not chunk:
            break

        for c in chunk:
            offset += 1
            if c.isspace():
                continue
            v = hex_digit_value(c)
            if v < 0:
                raise InvalidHex(f"Invalid hex character {c!r} at offset {offset - 1}")
            if high_nibble < 0:
                high_nibble = v
                continue
            group.append(high_nibble << 4 | v)
            high_nibble = -1
            if len(group) == 3:
                emit(encode_base64_block(group))
                group.clear()

    if high_nibble >= 0:
        raise OddDigits("Odd number of hex digits (incomplete byte at end of input)")

    if group:
        emit(encode_base64_block(group))
    emit("\n")

    return written
