from abc import ABC, abstractmethod

from dev_autofix.domain.ports.error_parser import ParsedError


class RepairActionPort(ABC):
    """Interface for the action that attempts to fix a detected error."""

    @abstractmethod
    async def repair(self, error: ParsedError) -> bool:
        """
        Attempts to fix the given error in the working tree.

        Args:
            error: The detected error.

        Returns:
            True if a fix was applied, False otherwise. May raise; callers treat
            an exception the same as a failed attempt.
        """
        pass
