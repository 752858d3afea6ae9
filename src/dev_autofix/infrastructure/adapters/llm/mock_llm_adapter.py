import logging
from typing import Any, Callable, Dict, Optional

from dev_autofix.domain.ports.llm_service import LLMServicePort

logger = logging.getLogger(__name__)


class MockLLMAdapter(LLMServicePort):
    """A mock LLM adapter for running the pipeline without API calls."""

    def __init__(self, config: Dict[str, Any]):
        self.config = config
        logger.info("MockLLMAdapter initialized.")

    async def generate_fix(self,
                           context_payload: Dict[str, Any],
                           on_text: Optional[Callable[[str], None]] = None) -> str:
        """Answers with the current file content, i.e. proposes no change."""
        prompt = context_payload.get("prompt", "")
        logger.info(f"--- MockLLMAdapter: Received prompt (first 500 chars) ---\n{prompt[:500]}...")

        target_file_path = context_payload.get("target_file_path", "unknown")
        language = context_payload.get("language", "typescript")
        explanation = f"Mock analysis of {target_file_path}: no change proposed.\n"
        response = f"{explanation}```{language}\n{context_payload.get('target_file_content', '')}\n```"

        if on_text:
            on_text(explanation)

        # Mock token usage information
        input_tokens = len(prompt) // 4
        output_tokens = len(response) // 4
        logger.info(f"Token usage - Input: {input_tokens}, Output: {output_tokens}, Total: {input_tokens + output_tokens} (estimated)")
        return response
