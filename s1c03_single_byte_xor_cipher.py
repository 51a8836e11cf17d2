#!/usr/bin/env python3
from single_xor import break_single_byte_xor
from util import hex_encode

"""
Single-byte XOR cipher

The hex encoded string:

1b37373331363f78151b7f2b783431333d78397828372d363c78373e783a393b3736

... has been XOR'd against a single character. Find the key, decrypt the message.

You can do this by hand. But don't: write code to do it for you.

How? Devise some method for "scoring" a piece of English plaintext. Character frequency is a good metric. Evaluate each output and choose the one with the best score.
"""


def main():
    ciphertext = "1b37373331363f78151b7f2b783431333d78397828372d363c78373e783a393b3736"
    res = break_single_byte_xor(ciphertext)
    print(f"Best key: {res.key:#04x}")
    print(f"Best plaintext (hex): {hex_encode(res.plaintext)}")
    print(f"Best plaintext (ascii): {res.plaintext.decode('latin-1')}")
    print(f"Score: {res.score:.2f}")


if __name__ == "__main__":
    main()
