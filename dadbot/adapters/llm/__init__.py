"""LLM adapters — OpenAI chat completions."""

from dadbot.adapters.llm.openai_adapter import CompletionError, OpenAIAdapter

__all__ = [
    "CompletionError",
    "OpenAIAdapter",
]
