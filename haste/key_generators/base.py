"""
Key Generator Interface

Defines the contract shared by every key generation strategy.
"""

from abc import ABC, abstractmethod


class KeyGenerator(ABC):
    """Key Generator Interface"""

    @abstractmethod
    def create_key(self, length: int) -> str:
        """
        Create a candidate document key

        Candidates are not checked for collisions here; the caller validates
        them against the document store.

        Args:
            length: Number of characters in the key

        Returns:
            str: Key of exactly `length` characters
        """
        pass
