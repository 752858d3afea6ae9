from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional


class LLMServicePort(ABC):
    """Interface for interacting with a Large Language Model service."""

    @abstractmethod
    async def generate_fix(self,
                           context_payload: Dict[str, Any],
                           on_text: Optional[Callable[[str], None]] = None) -> str:
        """
        Asks the model for a corrected version of a source file.

        Args:
            context_payload: A dictionary containing the prompt and the error
                             and file details it was built from.
            on_text: Called with each text fragment as the response streams in.

        Returns:
            The full response text, markdown code block intact.
        """
        pass
