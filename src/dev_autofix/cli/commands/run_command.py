# src/dev_autofix/cli/commands/run_command.py
import argparse
import asyncio
import logging
import os
from typing import Any, Dict

from dev_autofix.cli.adapter_factory import (
    create_file_system_adapter, create_error_parser, create_llm_service,
    create_repair_action, create_ui_service,
)
from dev_autofix.application.use_cases.run_with_autofix import RunWithAutofixUseCase
from dev_autofix.domain.ports.ui_service import LogLevel
from dev_autofix.infrastructure.factories.llm_service_factory import LLMServiceFactory

logger = logging.getLogger(__name__)


def has_api_key(config: Dict[str, Any]) -> bool:
    """Only the Gemini provider needs a credential."""
    if LLMServiceFactory.provider(config) != "google_gemini":
        return True
    return bool(config.get('generation', {}).get('api_key') or os.environ.get("GOOGLE_API_KEY"))


def handle_run(args: argparse.Namespace, config: Dict[str, Any]) -> int:
    """Handles running the dev command under supervision."""
    ui = create_ui_service(config)

    if not has_api_key(config):
        ui.log("Error: GOOGLE_API_KEY environment variable is required", LogLevel.ERROR)
        ui.log("Get your API key from https://aistudio.google.com/app/apikey", LogLevel.INFO)
        return 1

    command_line = args.command_line.strip()
    if not command_line:
        ui.log("Error: No command provided", LogLevel.ERROR)
        ui.log("Usage: autofix <command>", LogLevel.INFO)
        ui.log("Example: autofix npm run dev", LogLevel.INFO)
        return 1

    ui.panel(f"Starting: {command_line}\nMonitoring for errors...", "🔧 AutoFix", border_style="cyan")
    if args.dry_run:
        ui.log("Dry run: errors will be reported but not fixed", LogLevel.WARNING)

    try:
        root_dir = os.getcwd()
        file_system = create_file_system_adapter()
        error_parser = create_error_parser(config, root_dir)
        llm_service = create_llm_service(config)
        repair_action = create_repair_action(config, ui, llm_service, file_system, root_dir)

        use_case = RunWithAutofixUseCase(
            error_parser=error_parser,
            repair_action=repair_action,
            ui=ui,
            config=config,
            dry_run=args.dry_run,
            cwd=root_dir,
        )
        return asyncio.run(use_case.execute(command_line))
    except (ValueError, RuntimeError) as e:
        logger.critical(f"Failed to start autofix: {e}", exc_info=True)
        ui.log(f"Error: {e}", LogLevel.ERROR)
        return 1
