"""Code registry port - uniqueness oracle for survey and seed codes."""

from collections.abc import Iterable
from typing import Protocol


class CodeRegistry(Protocol):
    """Answers which codes are already taken anywhere in the code namespace.

    The namespace spans survey own codes, survey child codes, survey parent-code
    references and seed codes.
    """

    async def find_existing(self, codes: Iterable[str]) -> set[str]: ...
