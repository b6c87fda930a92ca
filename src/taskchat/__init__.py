"""Chat + task service relaying messages to an OpenAI-compatible LLM."""

__version__ = "0.1.0"
