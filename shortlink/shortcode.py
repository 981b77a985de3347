"""Short code generation utilities."""

import random
import string
from typing import Optional


class ShortCodeGenerator:
    """Generate random fixed-length short codes."""

    # Base62 characters (alphanumeric, case-sensitive)
    BASE62_CHARS = string.ascii_letters + string.digits  # a-zA-Z0-9

    def __init__(
        self,
        default_length: int = 6,
        alphabet: str = BASE62_CHARS,
        rng=None,
    ):
        """Initialize short code generator.

        Args:
            default_length: Default length for generated codes
            alphabet: Characters codes are drawn from
            rng: Random source exposing ``choices(population, k=...)``
                (defaults to the ``random`` module)
        """
        if default_length < 1:
            raise ValueError("Short code length must be at least 1")
        if not alphabet:
            raise ValueError("Alphabet must not be empty")

        self.default_length = default_length
        self.alphabet = alphabet
        self.rng = rng or random

    def generate_random(self, length: Optional[int] = None) -> str:
        """Generate a random short code.

        Each character is an independent uniform draw from the alphabet.

        Args:
            length: Length of the code (uses default if not specified)

        Returns:
            Random short code
        """
        length = length or self.default_length
        return ''.join(self.rng.choices(self.alphabet, k=length))

    def is_valid_format(self, code: str) -> bool:
        """Check if code only uses characters from the alphabet.

        Args:
            code: Code to validate

        Returns:
            True if valid format
        """
        if not code or not isinstance(code, str):
            return False
        return all(c in self.alphabet for c in code)
