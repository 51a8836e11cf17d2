import io
import random

import pytest

from util import ArgumentError, BufferTooSmall, OddInput, OutOfMemory, StreamError
from xor import CHUNK_SIZE, GrowableBuffer, fixed_xor, repeat_key, repeating_key_xor, xor_stream


class BrokenStream(io.RawIOBase):
    def readable(self):
        return True

    def writable(self):
        return True

    def read(self, size=-1):
        raise OSError("read failed")

    def write(self, b):
        raise OSError("write failed")


def test_fixed_xor_simple_values():
    assert fixed_xor(b"\x00\xff\x10\x55", b"\x00\x0f\x10\xaa") == b"\x00\xf0\x00\xff"


def test_fixed_xor_cryptopals_vector():
    res = fixed_xor(bytes.fromhex("1c0111001f010100061a024b53535009181c"),
                    bytes.fromhex("686974207468652062756c6c277320657965"))
    assert res == b"the kid don't play"


def test_fixed_xor_zero_length():
    assert fixed_xor(b"", b"") == b""


def test_fixed_xor_involution_and_commutativity():
    rng = random.Random(1337)
    for n in (1, 7, 64, 300):
        a = bytes(rng.randrange(256) for _ in range(n))
        b = bytes(rng.randrange(256) for _ in range(n))
        assert fixed_xor(fixed_xor(a, b), b) == a
        assert fixed_xor(a, b) == fixed_xor(b, a)


def test_fixed_xor_output_may_alias_input():
    data = bytearray(b"\x0f\xf0\xaa\x55")
    res = fixed_xor(data, b"\xff\x00\xaa\x55", out=data)
    assert res is data
    assert data == bytearray(b"\xf0\xf0\x00\x00")

    rhs = bytearray(b"\x01\x02")
    fixed_xor(b"\x01\x03", rhs, out=rhs)
    assert rhs == bytearray(b"\x00\x01")


def test_fixed_xor_errors():
    with pytest.raises(ArgumentError):
        fixed_xor(b"\x01", None)
    with pytest.raises(ArgumentError):
        fixed_xor(None, b"\x01")
    with pytest.raises(ValueError):
        fixed_xor(b"AAAA", b"AAA")
    with pytest.raises(BufferTooSmall):
        fixed_xor(b"AB", b"CD", out=bytearray(1))


def test_repeat_key():
    assert repeat_key(b"ICE", 8) == b"ICEICEIC"
    assert repeat_key(b"ICE", 2) == b"IC"
    assert repeat_key(b"ICE", 0) == b""
    assert repeat_key(b"\x58", 3) == b"XXX"
    with pytest.raises(ArgumentError):
        repeat_key(b"", 4)
    with pytest.raises(ArgumentError):
        repeat_key(None, 4)


def test_repeating_key_xor_ice_vector():
    plaintext = b"Burning 'em, if you ain't quick and nimble\nI go crazy when I hear a cymbal"
    expected = ("0b3637272a2b2e63622c2e69692a23693a2a3c6324202d623d63343c2a26226324"
                "272765272a282b2f20430a652e2c652a3124333a653e2b2027630c692b2028316528"
                "6326302e27282f")
    assert repeating_key_xor(plaintext, b"ICE").hex() == expected


def test_repeating_key_xor_round_trip():
    plaintext = b"Encrypt your mail. Encrypt your password file."
    assert repeating_key_xor(repeating_key_xor(plaintext, b"key"), b"key") == plaintext


def test_growable_buffer_doubles():
    buf = GrowableBuffer(initial_capacity=4)
    buf.append(b"abc")
    assert buf.capacity == 4
    buf.append(b"defgh")
    assert buf.capacity == 8
    buf.append(b"i")
    assert buf.capacity == 16
    assert len(buf) == 9
    assert bytes(buf.view()) == b"abcdefghi"


def test_growable_buffer_overflow_is_deterministic():
    buf = GrowableBuffer(initial_capacity=4, max_capacity=16)
    buf.append(b"A" * 16)
    assert buf.capacity == 16
    with pytest.raises(OutOfMemory):
        buf.append(b"A")
    # The failed append leaves the buffer as it was
    assert len(buf) == 16


def test_growable_buffer_bad_arguments():
    with pytest.raises(ArgumentError):
        GrowableBuffer(initial_capacity=0)
    with pytest.raises(ArgumentError):
        GrowableBuffer(initial_capacity=8, max_capacity=4)


def test_xor_stream_processes_two_buffers():
    out = io.BytesIO()
    assert xor_stream(io.BytesIO(bytes([0x01, 0x23, 0x45, 0x67, 0x89, 0xab, 0xcd, 0xef])), out) == 4
    assert out.getvalue() == b"\x88\x88\x88\x88"


def test_xor_stream_empty_input():
    out = io.BytesIO()
    assert xor_stream(io.BytesIO(b""), out) == 0
    assert out.getvalue() == b""


def test_xor_stream_odd_input():
    with pytest.raises(OddInput):
        xor_stream(io.BytesIO(b"\xaa\xbb\xcc"), io.BytesIO())


def test_xor_stream_large_input_grows_buffer():
    sample = 6000
    lhs = bytes(i & 0xff for i in range(sample))
    rhs = bytes((sample - i) & 0xff for i in range(sample))
    out = io.BytesIO()
    assert xor_stream(io.BytesIO(lhs + rhs), out) == sample
    assert out.getvalue() == fixed_xor(lhs, rhs)
    assert sample * 2 > CHUNK_SIZE


def test_xor_stream_small_chunks():
    out = io.BytesIO()
    xor_stream(io.BytesIO(b"hello" + b"world"), out, chunk_size=3)
    assert out.getvalue() == fixed_xor(b"hello", b"world")


def test_xor_stream_capacity_limit():
    with pytest.raises(OutOfMemory):
        xor_stream(io.BytesIO(bytes(100)), io.BytesIO(), chunk_size=16, max_capacity=64)


def test_xor_stream_io_errors():
    with pytest.raises(StreamError):
        xor_stream(BrokenStream(), io.BytesIO())
    with pytest.raises(StreamError):
        xor_stream(io.BytesIO(b"abcd"), BrokenStream())


def test_xor_stream_requires_streams():
    with pytest.raises(ArgumentError):
        xor_stream(None, io.BytesIO())


def test_growable_buffer_fills_up_to_a_cap_that_is_not_a_power_of_two():
    buf = GrowableBuffer(initial_capacity=16, max_capacity=100)
    buf.append(b"A" * 65)
    assert buf.capacity == 100
    buf.append(b"B" * 35)
    assert len(buf) == 100
    with pytest.raises(OutOfMemory):
        buf.append(b"C")


def test_xor_stream_accepts_input_up_to_max_capacity():
    lhs, rhs = bytes(range(40)), bytes(range(40, 80))
    out = io.BytesIO()
    assert xor_stream(io.BytesIO(lhs + rhs), out, chunk_size=16, max_capacity=100) == 40
    assert out.getvalue() == fixed_xor(lhs, rhs)
