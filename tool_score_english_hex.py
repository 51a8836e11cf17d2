#!/usr/bin/env python3
import logging
import sys

from english import score_english, score_to_percentage
from util import CryptopalsError, Empty, describe_error, hex_decode

"""
Read hex-encoded text from stdin and print how English-like it is, as a percentage. Whitespace in the input is
ignored
"""


def main() -> int:
    logging.basicConfig(level=logging.WARNING)
    try:
        data = hex_decode(sys.stdin.read(), strict=False)
        if not data:
            raise Empty("no hex data provided")
        score = score_english(data)
    except CryptopalsError as e:
        print(f"score_english_hex: {describe_error(e)}: {e}", file=sys.stderr)
        return 1
    print(f"{score_to_percentage(score):.2f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
