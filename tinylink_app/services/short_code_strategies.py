"""
Short code generation strategies for TinyLink.
Uses Strategy Pattern to allow different generation algorithms.

Strategies are pure: they only turn random bytes into a code. Checking the
code against the database is the job of UniqueCodeResolver.
"""

import secrets
import string
from abc import ABC, abstractmethod

MIN_CODE_LENGTH = 6
MAX_CODE_LENGTH = 8


class ShortCodeStrategy(ABC):
    """Abstract base class for short code generation strategies"""
    
    alphabet: str = ""
    
    def generate(self, length: int = MIN_CODE_LENGTH) -> str:
        """
        Generate a short code.
        
        Args:
            length: Number of characters, between 6 and 8
            
        Returns:
            A code of exactly ``length`` characters from ``alphabet``
            
        Raises:
            ValueError: If length is out of range
        """
        if not MIN_CODE_LENGTH <= length <= MAX_CODE_LENGTH:
            raise ValueError(
                f"Code length must be between {MIN_CODE_LENGTH} and "
                f"{MAX_CODE_LENGTH}, got {length}"
            )
        return self._encode(secrets.token_bytes(length), length)
    
    @abstractmethod
    def _encode(self, random_bytes: bytes, length: int) -> str:
        """Map random bytes onto the strategy's alphabet"""
        pass


class Base62ShortCodeStrategy(ShortCodeStrategy):
    """
    One random byte per character, reduced modulo 62.
    
    The modulo bias (256 is not a multiple of 62) makes the first eight
    symbols slightly more likely. Codes are identifiers, not secrets, so
    no rejection sampling is done.
    
    Capacity: 62^6 = 56,800,235,584 codes at the default length.
    """
    
    alphabet = string.digits + string.ascii_lowercase + string.ascii_uppercase
    
    def _encode(self, random_bytes: bytes, length: int) -> str:
        return "".join(self.alphabet[byte % 62] for byte in random_bytes)


class HexShortCodeStrategy(ShortCodeStrategy):
    """
    Lowercase hex digits taken from the random bytes.
    
    Smaller code space (16^6 = 16,777,216) but easy to read aloud.
    """
    
    alphabet = string.hexdigits[:16]
    
    def _encode(self, random_bytes: bytes, length: int) -> str:
        return random_bytes.hex()[:length]
