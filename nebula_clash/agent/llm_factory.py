"""Factory for creating chat model instances for the advisory collaborators."""

import os

from langchain_anthropic import ChatAnthropic
from langchain_aws import ChatBedrockConverse
from langchain_openai import ChatOpenAI

PROVIDERS = ("bedrock", "openai", "anthropic", "ollama")


class LLMFactory:
    """Factory for creating configured LLM clients.

    Centralizes LLM creation with provider-specific configurations.
    """

    def __init__(self, region: str | None = None, api_base: str | None = None):
        """Initialize LLM factory.

        Args:
            region: AWS region for Bedrock (default: us-east-1)
            api_base: API base URL for Ollama
        """
        self.region = region or os.getenv("AWS_REGION", "us-east-1")
        self.api_base = api_base

    def create(self, provider: str, model: str | None = None, **kwargs):
        """Create a chat model for a provider name.

        Args:
            provider: "bedrock", "openai", "anthropic" or "ollama"
            model: Provider-specific model name (provider default when None)
            **kwargs: Forwarded to the provider method (temperature, max_tokens)

        Raises:
            ValueError: If the provider is unknown
        """
        if provider not in PROVIDERS:
            raise ValueError(f"Unknown provider '{provider}'. Supported: {', '.join(PROVIDERS)}")
        return getattr(self, f"create_{provider}_llm")(model=model, **kwargs)

    def create_bedrock_llm(
        self,
        model: str | None = None,
        temperature: float = 0.2,
        max_tokens: int = 512,
    ) -> ChatBedrockConverse:
        """Create AWS Bedrock LLM.

        Args:
            model: Model name (haiku, sonnet) or full ID
            temperature: Sampling temperature (0-1)
            max_tokens: Maximum tokens to generate

        Returns:
            Configured ChatBedrockConverse instance
        """
        model_map = {
            "haiku": "global.anthropic.claude-haiku-4-5-20251001-v1:0",
            "sonnet": "global.anthropic.claude-sonnet-4-5-20250929-v1:0",
        }
        model_id = model_map.get(model, model) if model else model_map["haiku"]

        return ChatBedrockConverse(
            model=model_id,
            region_name=self.region,
            temperature=temperature,
            max_tokens=max_tokens,
        )

    def create_openai_llm(
        self,
        model: str | None = None,
        temperature: float = 0.2,
        max_tokens: int = 512,
    ) -> ChatOpenAI:
        """Create OpenAI LLM (default model: gpt-4o-mini)."""
        return ChatOpenAI(
            model=model or "gpt-4o-mini",
            temperature=temperature,
            max_tokens=max_tokens,
        )

    def create_anthropic_llm(
        self,
        model: str | None = None,
        temperature: float = 0.2,
        max_tokens: int = 512,
    ) -> ChatAnthropic:
        """Create Anthropic API LLM (default model: claude-3-5-haiku-20241022)."""
        return ChatAnthropic(
            model=model or "claude-3-5-haiku-20241022",
            temperature=temperature,
            max_tokens=max_tokens,
        )

    def create_ollama_llm(
        self,
        model: str | None = None,
        temperature: float = 0.2,
        max_tokens: int = 512,
    ):
        """Create Ollama LLM.

        Args:
            model: Model name (default: llama3)
            temperature: Sampling temperature (0-1)
            max_tokens: Maximum tokens to generate

        Returns:
            Configured ChatOllama instance
        """
        try:
            from langchain_ollama import ChatOllama
        except ImportError:
            raise ImportError(
                "langchain-ollama not installed. Install with: pip install langchain-ollama"
            )

        return ChatOllama(
            model=model or "llama3",
            temperature=temperature,
            num_predict=max_tokens,
            base_url=self.api_base or "http://localhost:11434",
        )
