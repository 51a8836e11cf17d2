#!/usr/bin/env python3
import logging
import sys

from util import CryptopalsError, describe_error
from xor import xor_stream

"""
Read two back-to-back equal-length buffers from stdin and write their XOR to stdout
"""


def main() -> int:
    logging.basicConfig(level=logging.WARNING)
    try:
        xor_stream(sys.stdin.buffer, sys.stdout.buffer)
    except CryptopalsError as e:
        print(f"fixed_xor: {describe_error(e)}: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
