"""
Random Key Generator

Draws every character uniformly from a flat keyspace.
"""

import secrets

from haste.key_generators.base import KeyGenerator

DEFAULT_KEYSPACE = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"


class RandomKeyGenerator(KeyGenerator):
    """Uniform Random Key Generator"""

    def __init__(self, keyspace: str = DEFAULT_KEYSPACE):
        """
        Initialize Generator

        Args:
            keyspace: Characters keys are drawn from

        Raises:
            ValueError: Empty keyspace
        """
        if not keyspace:
            raise ValueError("Key space must not be empty")
        self.keyspace = keyspace

    def create_key(self, length: int) -> str:
        return "".join(secrets.choice(self.keyspace) for _ in range(length))
