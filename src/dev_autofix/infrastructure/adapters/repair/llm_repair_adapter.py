"""
Repair action that asks an LLM for a corrected file and writes it back.
"""
import logging
import os
from typing import Any, Dict, Optional

from dev_autofix.application.prompts.repair_prompt import build_repair_prompt, language_for
from dev_autofix.application.utils.code_block_parser import parse_llm_code_block
from dev_autofix.domain.ports.error_parser import ParsedError
from dev_autofix.domain.ports.file_system import FileSystemPort
from dev_autofix.domain.ports.llm_service import LLMServicePort
from dev_autofix.domain.ports.repair_action import RepairActionPort
from dev_autofix.domain.ports.ui_service import LogLevel, UIServicePort

logger = logging.getLogger(__name__)


class LLMRepairAdapter(RepairActionPort):
    """Repairs an error by regenerating the faulty file with an LLM."""

    def __init__(self,
                 llm_service: LLMServicePort,
                 file_system: FileSystemPort,
                 ui: UIServicePort,
                 config: Dict[str, Any],
                 root_dir: Optional[str] = None):
        self.llm_service = llm_service
        self.file_system = file_system
        self.ui = ui
        self.config = config
        self.root_dir = root_dir or os.getcwd()
        self.default_language = config.get('generation', {}).get('language', 'typescript')

    async def repair(self, error: ParsedError) -> bool:
        file_path = os.path.join(self.root_dir, error.file)
        if not self.file_system.exists(file_path):
            logger.warning(f"Cannot repair {error.file}: file not found at {file_path}")
            self.ui.log(f"File not found: {error.file}", LogLevel.WARNING)
            return False

        try:
            original_content = self.file_system.read_file(file_path)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Cannot repair {error.file}: {e}")
            return False
        language = language_for(error.file, self.default_language)
        prompt = build_repair_prompt(error, original_content, language)

        context_payload = {
            "task": "repair_error",
            "prompt": prompt,
            "target_file_path": error.file,
            "target_file_content": original_content,
            "language": language,
            "parsed_error": error,
        }

        logger.info(f"Requesting fix for {error.key}")
        response = await self.llm_service.generate_fix(context_payload, on_text=self.ui.stream)
        self.ui.stream("\n")

        fixed_content = parse_llm_code_block(response, language)
        if fixed_content is None:
            logger.warning(f"No usable code block in response for {error.file}")
            return False

        if fixed_content.strip() == original_content.strip():
            logger.info(f"Model returned {error.file} unchanged")
            return False

        self.file_system.write_file(file_path, fixed_content)
        self.ui.log(f"✅ Modified: {error.file}", LogLevel.SUCCESS)
        return True
