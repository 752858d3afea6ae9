"""
Factory for creating UI service instances.
"""
import logging
from typing import Dict, Any

from dev_autofix.domain.ports.ui_service import UIServicePort
from dev_autofix.infrastructure.adapters.ui.rich_ui_adapter import RichUIAdapter

logger = logging.getLogger(__name__)


def create_ui_service(config: Dict[str, Any]) -> UIServicePort:
    """
    Create a UI service based on configuration.

    Args:
        config: The application configuration

    Returns:
        An implementation of UIServicePort
    """
    ui_type = config.get("ui", {}).get("type", "rich").lower()
    if ui_type != "rich":
        logger.warning(f"Unknown UI type '{ui_type}', using rich")
    return RichUIAdapter(config)
