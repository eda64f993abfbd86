"""
Context token budget management.

Treat prompt context as a resource with a budget. A ContextBudget lives
for exactly one question-answering request; it is never shared.
"""

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class ContextBudget:
    """Running token count against a fixed limit."""

    limit: int
    consumed: int = 0

    @property
    def remaining(self) -> int:
        """Tokens still available (negative if the seed already overflowed)."""
        return self.limit - self.consumed

    def fits(self, tokens: int) -> bool:
        """Whether ``tokens`` more would stay within the limit."""
        return self.consumed + tokens <= self.limit

    def try_consume(self, tokens: int) -> bool:
        """
        Consume ``tokens`` if they fit.

        Returns:
            True if consumed, False if the budget was left untouched
        """
        if tokens < 0:
            raise ValueError("token counts are never negative")
        if not self.fits(tokens):
            return False
        self.consumed += tokens
        return True
