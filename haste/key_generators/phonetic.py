"""
Phonetic Key Generator

Produces pronounceable keys by alternating consonants and vowels.
"""

import secrets

from haste.key_generators.base import KeyGenerator

VOWELS = "aeiou"
CONSONANTS = "bcdfghjklmnpqrstvwxyz"


class PhoneticKeyGenerator(KeyGenerator):
    """
    Phonetic Key Generator

    Whether a key starts with a consonant or a vowel is drawn per call,
    so both shapes are equally likely.
    """

    def create_key(self, length: int) -> str:
        start = secrets.randbelow(2)
        return "".join(
            secrets.choice(CONSONANTS) if i % 2 == start else secrets.choice(VOWELS)
            for i in range(length)
        )
