"""Code generator - random referral codes checked against the code registry."""

import logging
import random
import secrets
from collections.abc import Iterable

from rdsguard.application.ports.code_registry import CodeRegistry
from rdsguard.domain.exceptions import CodeGenerationExhausted
from rdsguard.domain.value_objects import CodePolicy

logger = logging.getLogger(__name__)


class CodeGenerator:
    """Draws codes under a ``CodePolicy`` until the registry reports them free.

    Nothing is reserved: a code is only taken once the record carrying it is
    written, so callers persist in the same unit of work that asked for it.
    """

    def __init__(
        self,
        registry: CodeRegistry,
        policy: CodePolicy | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._registry = registry
        self._policy = policy or CodePolicy()
        self._rng = rng or secrets.SystemRandom()

    @property
    def policy(self) -> CodePolicy:
        return self._policy

    def generate_code(self) -> str:
        """One random code. Uniqueness is not checked."""
        alphabet = self._policy.alphabet
        return "".join(self._rng.choice(alphabet) for _ in range(self._policy.length))

    async def generate_unique_code(self, existing_batch: Iterable[str] = frozenset()) -> str:
        """A code absent from the registry and from ``existing_batch``."""
        excluded = set(existing_batch)
        for attempt in range(1, self._policy.max_attempts + 1):
            code = self.generate_code()
            if code in excluded:
                logger.debug("Attempt %d: code collides with current batch", attempt)
                continue
            if not await self._registry.find_existing([code]):
                return code
            logger.debug("Attempt %d: code already registered", attempt)

        logger.warning(
            "Could not generate a unique code after %d attempts", self._policy.max_attempts
        )
        raise CodeGenerationExhausted(
            f"Failed to generate a unique code after {self._policy.max_attempts} attempts"
        )

    async def generate_child_code_batch(
        self,
        n: int | None = None,
        exclude: Iterable[str] = frozenset(),
    ) -> list[str]:
        """``n`` distinct codes, all free. The whole batch is redrawn on any clash."""
        size = n if n is not None else self._policy.batch_size
        excluded = set(exclude)
        for attempt in range(1, self._policy.max_attempts + 1):
            batch = [self.generate_code() for _ in range(size)]
            if len(set(batch)) != size or excluded.intersection(batch):
                logger.debug("Attempt %d: duplicate code inside batch", attempt)
                continue
            taken = await self._registry.find_existing(batch)
            if not taken:
                return batch
            logger.debug("Attempt %d: %d code(s) already registered", attempt, len(taken))

        logger.warning(
            "Could not generate %d unique child codes after %d attempts",
            size,
            self._policy.max_attempts,
        )
        raise CodeGenerationExhausted(
            f"Failed to generate {size} unique child codes after "
            f"{self._policy.max_attempts} attempts"
        )
