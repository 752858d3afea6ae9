"""
Utility functions for parsing code blocks from LLM responses.
"""
import logging
import re
from typing import Optional

logger = logging.getLogger(__name__)

# Signs that an unfenced response is JS/TS source rather than prose
CODE_INDICATORS = re.compile(r"^\s*(?:import |export |const |let |function |class |module\.exports)", re.MULTILINE)
MIN_UNFENCED_CODE_LENGTH = 50


def parse_llm_code_block(response_text: str, language: str = "typescript") -> Optional[str]:
    """
    Extracts code from the first markdown code block.

    Args:
        response_text: The LLM response text
        language: The fence language tag the model was asked to use

    Returns:
        The extracted code, or None if no code block is found
    """
    logger.debug("Parsing LLM response for code block...")
    if not response_text or not isinstance(response_text, str):
        logger.warning("Empty or non-string LLM response")
        return None

    response_text = response_text.strip()

    start_index = response_text.find("```")
    if start_index != -1:
        # Skip the rest of the opening fence line (the language tag, if any)
        line_end = response_text.find("\n", start_index)
        if line_end == -1:
            logger.warning("Found opening code fence but no content in LLM response")
            return None
        content_start = line_end + 1
        end_index = response_text.find("```", content_start)

        if end_index == -1:
            logger.warning("Found start code tag but no end tag in LLM response")
            code = response_text[content_start:].rstrip()
            if len(code) > MIN_UNFENCED_CODE_LENGTH:
                logger.warning("Using partial code block (no end tag found)")
                return code + "\n"
            return None

        code = response_text[content_start:end_index].rstrip()
        if not code.strip():
            logger.warning("LLM response contained an empty code block")
            return None

        logger.debug(f"Successfully extracted {language} code block of {len(code)} characters")
        return code + "\n"

    # Fallback for models that answer with bare code
    if len(response_text) > MIN_UNFENCED_CODE_LENGTH and CODE_INDICATORS.search(response_text):
        logger.warning(f"No code block found, but response appears to be {language} code. Using entire response.")
        return response_text + "\n"

    logger.warning("Could not find valid code block in LLM response")
    return None
