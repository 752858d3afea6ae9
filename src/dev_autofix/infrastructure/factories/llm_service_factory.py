# src/dev_autofix/infrastructure/factories/llm_service_factory.py
"""
Factory for creating LLM service instances.
"""
import logging
from typing import Dict, Any

from dev_autofix.domain.ports.llm_service import LLMServicePort

logger = logging.getLogger(__name__)

LLM_PROVIDERS = ("google_gemini", "mock")


class LLMServiceFactory:
    """
    Factory for creating LLM service instances.
    """

    @staticmethod
    def provider(config: Dict[str, Any]) -> str:
        return config.get("generation", {}).get("llm_provider", "google_gemini")

    @staticmethod
    def create_llm_service(config: Dict[str, Any]) -> LLMServicePort:
        """
        Create an LLM service based on configuration.

        Args:
            config: Configuration dictionary

        Returns:
            An instance of LLMServicePort

        Raises:
            ValueError: If the LLM provider is unknown or its credential is missing
        """
        provider = LLMServiceFactory.provider(config)

        logger.info(f"Creating LLM service for provider: {provider}")

        if provider == "google_gemini":
            # Import here so the mock provider works without the Google SDK configured
            from dev_autofix.infrastructure.adapters.llm.google_gemini_adapter import GoogleGeminiAdapter
            return GoogleGeminiAdapter(config)
        elif provider == "mock":
            from dev_autofix.infrastructure.adapters.llm.mock_llm_adapter import MockLLMAdapter
            return MockLLMAdapter(config)
        else:
            raise ValueError(f"Unknown LLM provider: {provider} (expected one of: {', '.join(LLM_PROVIDERS)})")
