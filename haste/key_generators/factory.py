"""
Key Generator Factory Module

Creates the key generator selected by configuration.
"""

from haste.key_generators.base import KeyGenerator
from haste.key_generators.phonetic import PhoneticKeyGenerator
from haste.key_generators.random import RandomKeyGenerator


def create_key_generator(name: str, **options) -> KeyGenerator:
    """
    Create key generator for the specified strategy

    Args:
        name: Strategy name, "phonetic" or "random"
        **options: Strategy specific options (e.g. keyspace for "random")

    Returns:
        KeyGenerator: Generator instance

    Raises:
        ValueError: Unsupported strategy
    """
    name = name.lower()

    if name == "phonetic":
        return PhoneticKeyGenerator()
    if name == "random":
        return RandomKeyGenerator(**options)
    raise ValueError(f"Unsupported key generator: {name}")
