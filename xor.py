import logging
import sys
from itertools import cycle
from typing import BinaryIO, Optional

from util import ArgumentError, BufferTooSmall, OddInput, OutOfMemory, StreamError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 4096


def fixed_xor(b1: Optional[bytes], b2: Optional[bytes], out=None):
    """
    Take two bytes arguments of equal length, return their XOR

    If out is given, the result is written into it (it may be b1 or b2 itself) and out is returned

    >>> arg1 = bytes.fromhex('1c0111001f010100061a024b53535009181c')
    >>> arg2 = bytes.fromhex('686974207468652062756c6c277320657965')
    >>> fixed_xor(arg1, arg2).hex()
    '746865206b696420646f6e277420706c6179'

    >>> data = bytearray(b"\\x0f\\xf0")
    >>> fixed_xor(data, b"\\xff\\x00", out=data)
    bytearray(b'\\xf0\\xf0')

    >>> fixed_xor(b"AAAA", b"AAA")
    Traceback (most recent call last):
    util.ArgumentError: Arguments are of different length
    """
    if b1 is None or b2 is None:
        raise ArgumentError("Both arguments are required")
    if len(b1) != len(b2):
        raise ArgumentError("Arguments are of different length")
    if out is None:
        return bytes(a ^ b for a, b in zip(b1, b2))
    if len(out) < len(b1):
        raise BufferTooSmall(f"Need {len(b1)} bytes but the output holds {len(out)}")
    for i in range(len(b1)):
        out[i] = b1[i] ^ b2[i]
    return out


def repeat_key(key: Optional[bytes], length: int) -> bytes:
    """
    Cycle key out to length bytes

    >>> repeat_key(b"ICE", 8)
    b'ICEICEIC'
    >>> repeat_key(b"", 0)
    b''
    >>> repeat_key(b"", 4)
    Traceback (most recent call last):
    util.ArgumentError: Cannot expand an empty key
    """
    if key is None:
        raise ArgumentError("key is required")
    if length < 0:
        raise ArgumentError("length must be >= 0")
    if length == 0:
        return b""
    if not key:
        raise ArgumentError("Cannot expand an empty key")
    return bytes(b for b, _ in zip(cycle(key), range(length)))


def repeating_key_xor(plaintext: bytes, key: bytes) -> bytes:
    """
    Cycle the key, XOR plaintext with it, and return ciphertext

    >>> plaintext = b"Burning 'em, if you ain't quick and nimble\\nI go crazy when I hear a cymbal"
    >>> repeating_key_xor(plaintext, b"ICE").hex()
    '0b3637272a2b2e63622c2e69692a23693a2a3c6324202d623d63343c2a26226324272765272a282b2f20430a652e2c652a3124333a653e2b2027630c692b20283165286326302e27282f'
    """
    if plaintext is None:
        raise ArgumentError("plaintext is required")
    return fixed_xor(plaintext, repeat_key(key, len(plaintext)))


class GrowableBuffer:
    """
    A byte buffer which tracks its own capacity and doubles it on demand

    Growth beyond max_capacity raises OutOfMemory rather than relying on the allocator to fail

    >>> buf = GrowableBuffer(initial_capacity=2, max_capacity=8)
    >>> buf.append(b"ABCDE")
    >>> buf.capacity, len(buf)
    (8, 5)
    >>> buf.append(b"FGHI")
    Traceback (most recent call last):
    util.OutOfMemory: Cannot grow buffer past 8 bytes (need 9)
    """
    capacity: int
    max_capacity: int

    def __init__(self, initial_capacity: int = CHUNK_SIZE, max_capacity: int = sys.maxsize):
        if initial_capacity <= 0:
            raise ArgumentError("initial_capacity must be > 0")
        if max_capacity < initial_capacity:
            raise ArgumentError("max_capacity must be >= initial_capacity")
        self.max_capacity = max_capacity
        self.capacity = initial_capacity
        self._length = 0
        try:
            self._data = bytearray(initial_capacity)
        except MemoryError as e:
            raise OutOfMemory(f"Cannot allocate {initial_capacity} bytes") from e

    def __len__(self) -> int:
        return self._length

    def reserve(self, required: int) -> None:
        if required > self.max_capacity:
            raise OutOfMemory(f"Cannot grow buffer past {self.max_capacity} bytes (need {required})")

        new_capacity = self.capacity
        while required > new_capacity:
            # The last doubling is clamped to max_capacity
            new_capacity = min(new_capacity * 2, self.max_capacity)

        if new_capacity == self.capacity:
            return

        try:
            self._data.extend(bytes(new_capacity - self.capacity))
        except MemoryError as e:
            raise OutOfMemory(f"Cannot grow buffer to {new_capacity} bytes") from e
        logger.debug("Grew buffer from %d to %d bytes", self.capacity, new_capacity)
        self.capacity = new_capacity

    def append(self, chunk: bytes) -> None:
        end = self._length + len(chunk)
        self.reserve(end)
        self._data[self._length:end] = chunk
        self._length = end

    def view(self) -> memoryview:
        return memoryview(self._data)[:self._length]


def xor_stream(infile: BinaryIO, outfile: BinaryIO, chunk_size: int = CHUNK_SIZE,
               max_capacity: int = sys.maxsize) -> int:
    """
    Read infile to EOF, treat the data as two back-to-back equal-length buffers, and write their XOR to outfile

    Returns the number of bytes written

    >>> import io
    >>> out = io.BytesIO()
    >>> xor_stream(io.BytesIO(b"\\x01\\x23\\x89\\xab"), out)
    2
    >>> out.getvalue().hex()
    '8888'
    >>> xor_stream(io.BytesIO(b"abc"), io.BytesIO())
    Traceback (most recent call last):
    util.OddInput: Input length 3 is odd, cannot split into two equal halves
    """
    if infile is None or outfile is None:
        raise ArgumentError("Both streams are required")
    if chunk_size <= 0:
        raise ArgumentError("chunk_size must be > 0")

    buf = GrowableBuffer(initial_capacity=min(chunk_size, max_capacity), max_capacity=max_capacity)

    try:
        while True:
            chunk = infile.read(chunk_size)
            if not chunk:
                break
            buf.append(chunk)
    except OSError as e:
        raise StreamError(f"Failed to read input: {e}") from e

    length = len(buf)
    if length % 2:
        raise OddInput(f"Input length {length} is odd, cannot split into two equal halves")

    half = length // 2
    data = buf.view()
    # The first half is overwritten with the result
    fixed_xor(data[:half], data[half:], out=data[:half])

    try:
        written = outfile.write(data[:half])
    except OSError as e:
        raise StreamError(f"Failed to write output: {e}") from e
    if written is not None and written != half:
        raise StreamError(f"Short write ({written} of {half} bytes)")

    return half
