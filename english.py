from typing import Optional, Tuple

from util import ArgumentError, Empty, hex_decode

# Proportions of a-z then space in typical English prose. Index 26 is space
EN_FREQUENCIES: Tuple[float, ...] = (
    0.0817, 0.0150, 0.0278, 0.0425, 0.1270, 0.0223, 0.0202, 0.0609, 0.0697,  # a-i
    0.0015, 0.0077, 0.0403, 0.0241, 0.0675, 0.0751, 0.0193, 0.0010, 0.0599,  # j-r
    0.0633, 0.0906, 0.0276, 0.0098, 0.0236, 0.0015, 0.0197, 0.0007,          # s-z
    0.1300,                                                                  # space
)

SPACE_BUCKET = 26
NON_PRINTABLE_PENALTY = 50.0
LETTER_RATIO_WEIGHT = 50.0
NO_LETTERS_SCORE = -1000.0
EPSILON = 1e-9

# Allowed in English text but not scored as letters
NEUTRAL_BYTES = frozenset(b"\n\r\t,.'\"")


def chi_squared(observed_count: float, expected_count: float, epsilon: float = EPSILON) -> float:
    """
    Return the chi squared term for a given observed and expected count. If observed and expected are equal
    the result is zero, else it increases as the delta between the counts increase. i.e. bigger
    number == worse match

    epsilon keeps buckets with (near) zero expectation from dividing by zero

    https://en.wikipedia.org/wiki/Chi-squared_test

    >>> abs(chi_squared(90, 80.54) - 1.11) < .01
    True
    >>> chi_squared(0, 0)
    0.0
    """
    delta = observed_count - expected_count
    return delta * delta / (expected_count + epsilon)


def score_english(text: Optional[bytes]) -> float:
    """
    Give a score for how English-like text is. Higher score means more English-like input

    Letters (case-folded) and spaces are compared against EN_FREQUENCIES with a chi squared statistic. A bonus is
    given for the proportion of letters and spaces. Common punctuation and other printable ASCII is tolerated but
    not scored. Every byte outside printable ASCII costs NON_PRINTABLE_PENALTY.

    >>> score_english(b"The quick brown fox ") > score_english(bytes.fromhex("9f4c3ad2b7e18c44ff00aa11cc33"))
    True
    >>> score_english(b"1234")
    -1000.0
    >>> score_english(b"12\\x00")
    -1050.0
    >>> score_english(b"")
    Traceback (most recent call last):
    util.Empty: Cannot score empty text
    """
    if text is None:
        raise ArgumentError("text is required")
    if not text:
        raise Empty("Cannot score empty text")

    counts = [0] * len(EN_FREQUENCIES)
    total_letters = 0
    penalty = 0.0

    for b in text:
        if 0x41 <= b <= 0x5a or 0x61 <= b <= 0x7a:
            counts[(b | 0x20) - 0x61] += 1
            total_letters += 1
        elif b == 0x20:
            counts[SPACE_BUCKET] += 1
            total_letters += 1
        elif b in NEUTRAL_BYTES:
            pass
        elif b < 0x20 or b > 0x7e:
            penalty += NON_PRINTABLE_PENALTY

    if total_letters == 0:
        return NO_LETTERS_SCORE - penalty

    chi2 = 0.0
    for observed, frequency in zip(counts, EN_FREQUENCIES):
        chi2 += chi_squared(observed, frequency * total_letters)

    letter_ratio = total_letters / len(text)
    return -chi2 + letter_ratio * LETTER_RATIO_WEIGHT - penalty


def score_english_hex(hex: Optional[str]) -> float:
    """
    Score hex-encoded text with score_english

    >>> score_english_hex("54686520717569636b2062726f776e20666f7820") == score_english(b"The quick brown fox ")
    True
    >>> score_english_hex("414")
    Traceback (most recent call last):
    util.OddLength: Odd number of hex digits (3)
    """
    if hex is None:
        raise ArgumentError("hex input is required")
    if not hex:
        raise Empty("Cannot score empty text")
    return score_english(hex_decode(hex))


def score_to_percentage(score: float) -> float:
    """
    Squash a raw score into 0-100 for display

    >>> score_to_percentage(12.5)
    62.5
    >>> score_to_percentage(-1000.0), score_to_percentage(75.0)
    (0.0, 100.0)
    """
    return min(max(score + 50.0, 0.0), 100.0)
