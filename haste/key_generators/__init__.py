"""
Key Generator Module Initialization
"""

from haste.key_generators.base import KeyGenerator
from haste.key_generators.phonetic import PhoneticKeyGenerator
from haste.key_generators.random import RandomKeyGenerator
from haste.key_generators.factory import create_key_generator

__all__ = [
    "KeyGenerator",
    "PhoneticKeyGenerator",
    "RandomKeyGenerator",
    "create_key_generator",
]
