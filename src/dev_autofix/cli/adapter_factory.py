import logging
from typing import Any, Dict

from dev_autofix.domain.ports.error_parser import ErrorParserPort
from dev_autofix.domain.ports.file_system import FileSystemPort
from dev_autofix.domain.ports.llm_service import LLMServicePort
from dev_autofix.domain.ports.repair_action import RepairActionPort
from dev_autofix.domain.ports.ui_service import UIServicePort
from dev_autofix.infrastructure.adapters.error_parsing.error_validator import ErrorValidator
from dev_autofix.infrastructure.adapters.error_parsing.regex_error_parser_adapter import RegexErrorParserAdapter
from dev_autofix.infrastructure.adapters.file_system_adapter import FileSystemAdapter
from dev_autofix.infrastructure.adapters.repair.llm_repair_adapter import LLMRepairAdapter
from dev_autofix.infrastructure.factories.llm_service_factory import LLMServiceFactory
from dev_autofix.infrastructure.factories.ui_service_factory import create_ui_service

logger = logging.getLogger(__name__)


def create_file_system_adapter() -> FileSystemPort:
    logger.debug("Creating FileSystemAdapter")
    return FileSystemAdapter()


def create_error_parser(config: Dict[str, Any], root_dir: str) -> ErrorParserPort:
    logger.debug("Creating RegexErrorParserAdapter")
    validator = ErrorValidator.from_config(config, root_dir=root_dir)
    return RegexErrorParserAdapter(config, validator=validator)


def create_llm_service(config: Dict[str, Any]) -> LLMServicePort:
    return LLMServiceFactory.create_llm_service(config)


def create_repair_action(config: Dict[str, Any],
                         ui: UIServicePort,
                         llm_service: LLMServicePort,
                         file_system: FileSystemPort,
                         root_dir: str) -> RepairActionPort:
    logger.debug("Creating LLMRepairAdapter")
    return LLMRepairAdapter(
        llm_service=llm_service,
        file_system=file_system,
        ui=ui,
        config=config,
        root_dir=root_dir,
    )


__all__ = [
    "create_file_system_adapter",
    "create_error_parser",
    "create_llm_service",
    "create_repair_action",
    "create_ui_service",
]
