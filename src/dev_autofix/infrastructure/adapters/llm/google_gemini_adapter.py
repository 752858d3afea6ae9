import logging
import os
from typing import Any, Callable, Dict, Optional

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from dev_autofix.application.prompts.repair_prompt import build_repair_prompt
from dev_autofix.domain.ports.llm_service import LLMServicePort

logger = logging.getLogger(__name__)


class GoogleGeminiAdapter(LLMServicePort):
    """LLM service implementation using Google Gemini."""

    def __init__(self, config: Dict[str, Any]):
        self.config = config
        self.model_name = config.get('generation', {}).get('model_name', 'gemini-1.5-flash-latest')
        api_key = config.get('generation', {}).get('api_key') or os.environ.get("GOOGLE_API_KEY")

        if not api_key:
            logger.error("Google API Key not found in config or environment variable GOOGLE_API_KEY.")
            raise ValueError("Missing Google API Key for Gemini.")

        try:
            genai.configure(api_key=api_key)
            self.model = genai.GenerativeModel(self.model_name)
            logger.info(f"Google Gemini Adapter initialized with model: {self.model_name}")
        except Exception as e:
            logger.error(f"Failed to configure Google Generative AI: {e}", exc_info=True)
            raise RuntimeError(f"Could not initialize Google Gemini client: {e}") from e

    async def generate_fix(self,
                           context_payload: Dict[str, Any],
                           on_text: Optional[Callable[[str], None]] = None) -> str:
        """Streams a fix from the configured Gemini model."""
        prompt = context_payload.get("prompt")
        if not prompt:
            logger.warning("No prompt provided in context payload. Building one from the error details.")
            prompt = build_repair_prompt(
                context_payload["parsed_error"],
                context_payload.get("target_file_content", ""),
                context_payload.get("language", "typescript"),
            )

        logger.info(f"Sending request to Gemini model: {self.model_name}")
        logger.debug(f"Prompt (first 500 chars): {prompt[:500]}...")

        # Configure safety settings (important for code generation)
        safety_settings = [
            {"category": "HARM_CATEGORY_HARASSMENT", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
            {"category": "HARM_CATEGORY_HATE_SPEECH", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
            {"category": "HARM_CATEGORY_SEXUALLY_EXPLICIT", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
            {"category": "HARM_CATEGORY_DANGEROUS_CONTENT", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
        ]

        fragments = []
        try:
            response = await self.model.generate_content_async(
                prompt,
                generation_config=genai.types.GenerationConfig(),
                safety_settings=safety_settings,
                stream=True,
            )
            async for chunk in response:
                try:
                    text = chunk.text
                except ValueError:
                    # Raised when a candidate has no text parts, e.g. a safety block
                    block_reason = chunk.prompt_feedback.block_reason if chunk.prompt_feedback else "Unknown"
                    logger.error(f"Gemini response blocked. Reason: {block_reason}")
                    break
                fragments.append(text)
                if on_text:
                    on_text(text)

            try:
                usage_metadata = getattr(response, 'usage_metadata', None)
                if usage_metadata:
                    logger.info(f"Token usage - Input: {usage_metadata.prompt_token_count}, Output: {usage_metadata.candidates_token_count}, Total: {usage_metadata.total_token_count}")
            except Exception as e:
                logger.warning(f"Failed to get token usage information: {e}")

        except google_exceptions.GoogleAPIError as e:
            logger.error(f"Google API Error during Gemini request: {e}", exc_info=True)
            return ""

        generated_text = "".join(fragments)
        logger.info("Received response from Gemini.")
        logger.debug(f"Response (first 500 chars): {generated_text[:500]}...")
        return generated_text
