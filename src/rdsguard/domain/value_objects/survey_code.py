"""Survey code constants and generation policy."""

import string
from dataclasses import dataclass

# Parent code of a survey rooted at a seed (or created without referral).
# The underscore keeps it outside any generated alphabet.
SEED_PARENT_SENTINEL = "_SEED_"

DEFAULT_CODE_ALPHABET = string.digits + string.ascii_uppercase
DEFAULT_CODE_LENGTH = 8
DEFAULT_MAX_ATTEMPTS = 3
CHILD_CODE_COUNT = 3


@dataclass(frozen=True)
class CodePolicy:
    """Alphabet, length and retry budget for generated codes."""

    alphabet: str = DEFAULT_CODE_ALPHABET
    length: int = DEFAULT_CODE_LENGTH
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    batch_size: int = CHILD_CODE_COUNT

    def __post_init__(self) -> None:
        if not self.alphabet:
            raise ValueError("Code alphabet must not be empty")
        if "_" in self.alphabet:
            raise ValueError("Code alphabet must not contain '_'")
        if self.length < 1:
            raise ValueError("Code length must be positive")
        if self.max_attempts < 1:
            raise ValueError("Retry budget must be positive")
        if self.batch_size < 1:
            raise ValueError("Batch size must be positive")

    def is_well_formed(self, code: str) -> bool:
        """True if ``code`` could have been produced under this policy."""
        return len(code) == self.length and all(ch in self.alphabet for ch in code)
