import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from english import score_english
from util import ArgumentError, Empty, InvalidHex, OddLength, hex_decode
from xor import fixed_xor, repeat_key

logger = logging.getLogger(__name__)


@dataclass
class ScoredDecryptionResult:
    plaintext: bytes
    ciphertext: bytes
    key: int
    score: float
    line: Optional[int] = None

    def __repr__(self):
        line = f", line={self.line}" if self.line is not None else ""
        return f"ScoredDecryptionResult(plaintext={self.plaintext}, ciphertext={self.ciphertext}, key={self.key:#04x}, score={self.score:.2f}{line})"


def _candidates(ciphertext: bytes, scoring_function: Callable[[bytes], float]):
    for k in range(256):
        plaintext = fixed_xor(ciphertext, repeat_key(bytes([k]), len(ciphertext)))
        yield ScoredDecryptionResult(plaintext=plaintext,
                                     ciphertext=ciphertext,
                                     key=k,
                                     score=scoring_function(plaintext))


def break_single_byte_xor_bytes(ciphertext: Optional[bytes],
                                scoring_function: Callable[[bytes], float] = score_english) -> ScoredDecryptionResult:
    """
    Try every key byte against ciphertext and return the most English-like decryption

    Keys are tried in ascending order and a candidate only replaces the best so far if it scores strictly higher,
    so the lowest key wins a tie

    >>> break_single_byte_xor_bytes(b"")
    Traceback (most recent call last):
    util.Empty: ciphertext must be non-zero length
    """
    if ciphertext is None:
        raise ArgumentError("ciphertext is required")
    if not ciphertext:
        raise Empty("ciphertext must be non-zero length")

    candidates = _candidates(ciphertext, scoring_function)
    # Key 0 is the best until something scores strictly higher
    best = next(candidates)

    for candidate in candidates:
        if candidate.score > best.score:
            best = candidate

    logger.debug("Best single-byte key %#04x scored %.2f", best.key, best.score)
    return best


def break_single_byte_xor(ciphertext_hex: Optional[str],
                          scoring_function: Callable[[bytes], float] = score_english) -> ScoredDecryptionResult:
    """
    Use character frequency analysis to brute-force a hex-encoded single-byte XOR ciphertext

    >>> res = break_single_byte_xor("1b37373331363f78151b7f2b783431333d78397828372d363c78373e783a393b3736")
    >>> res.plaintext
    b"Cooking MC's like a pound of bacon"
    >>> hex(res.key)
    '0x58'

    >>> break_single_byte_xor("123")
    Traceback (most recent call last):
    util.OddLength: Odd number of hex digits (3)
    """
    if ciphertext_hex is None:
        raise ArgumentError("ciphertext is required")
    if not ciphertext_hex:
        raise Empty("ciphertext must be non-zero length")
    return break_single_byte_xor_bytes(hex_decode(ciphertext_hex), scoring_function=scoring_function)


def rank_single_byte_xor_keys(ciphertext: bytes,
                              scoring_function: Callable[[bytes], float] = score_english) -> List[ScoredDecryptionResult]:
    """
    Return the decryptions under all 256 keys, best first

    The sort is stable so equal scores stay in ascending key order, and the first entry is always the one
    break_single_byte_xor_bytes picks

    >>> ranked = rank_single_byte_xor_keys(bytes.fromhex("1b37373331363f78151b7f2b783431333d78397828372d363c78373e783a393b3736"))
    >>> len(ranked), ranked[0].key
    (256, 88)
    """
    if ciphertext is None:
        raise ArgumentError("ciphertext is required")
    if not ciphertext:
        raise Empty("ciphertext must be non-zero length")
    return sorted(_candidates(ciphertext, scoring_function), key=lambda x: x.score, reverse=True)


def detect_single_byte_xor(lines: Iterable[str],
                           scoring_function: Callable[[bytes], float] = score_english) -> Optional[ScoredDecryptionResult]:
    """
    Given hex-encoded candidate lines, find the one which was most likely encrypted with single-byte XOR

    Every line is broken independently and the best result across all lines is returned. Only the trailing CR/LF
    is removed from each line, so other surrounding whitespace makes a line invalid. Blank lines are not counted:
    line is the 1-based position among the non-blank lines. Lines that aren't valid hex are skipped. Returns None
    if no line could be broken at all

    >>> lines = ["zz", "", "1b37373331363f78151b7f2b783431333d78397828372d363c78373e783a393b3736\\n"]
    >>> res = detect_single_byte_xor(lines)
    >>> res.line, res.plaintext
    (2, b"Cooking MC's like a pound of bacon")
    >>> detect_single_byte_xor(["abc"]) is None
    True
    """
    best: Optional[ScoredDecryptionResult] = None
    line_number = 0

    for line in lines:
        line = line.rstrip("\r\n")
        if not line:
            continue
        line_number += 1
        try:
            candidate = break_single_byte_xor(line, scoring_function=scoring_function)
        except (InvalidHex, OddLength) as e:
            logger.warning("Skipping line %d: %s", line_number, e)
            continue
        if best is None or candidate.score > best.score:
            candidate.line = line_number
            best = candidate

    if best is None:
        logger.debug("No line could be broken")
    return best
