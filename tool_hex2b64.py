#!/usr/bin/env python3
import logging
import sys

from b64 import hex2b64_stream
from util import CryptopalsError, describe_error

"""
Read hex from stdin and write its Base64 encoding to stdout. Whitespace in the input is ignored
"""


def main() -> int:
    logging.basicConfig(level=logging.WARNING)
    try:
        hex2b64_stream(sys.stdin, sys.stdout)
    except CryptopalsError as e:
        print(f"hex2b64: {describe_error(e)}: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
