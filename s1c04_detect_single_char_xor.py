#!/usr/bin/env python3
from single_xor import detect_single_byte_xor

"""
Detect single-character XOR

One of the 60-character strings in this file has been encrypted by single-character XOR.

Find it.

(Your code from #3 should help.)
"""


def main():
    with open("data/s1c04.txt", "r") as f:
        res = detect_single_byte_xor(f)

    if res is None:
        print("No suitable candidate found.")
        return

    print(f"Best line: {res.line}")
    print(f"Best key: {res.key:#04x} ({res.key})")
    print(f"Score: {res.score:.2f}")
    print(f"Plaintext: {res.plaintext.decode('latin-1')}")


if __name__ == "__main__":
    main()
