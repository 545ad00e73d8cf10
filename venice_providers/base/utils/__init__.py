"""Pure helper functions shared by the adapter layer."""

from .openai_format import convert_message, to_openai_messages

__all__ = ["convert_message", "to_openai_messages"]
