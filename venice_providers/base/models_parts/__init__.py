"""DTO parts package; prefer importing from ``venice_providers.base.models``."""

from .content_part import ContentPart, ContentPartType
from .message import Message, Role
from .model_descriptor import ModelCapabilities, ModelDescriptor

__all__ = [
    "ContentPart",
    "ContentPartType",
    "Message",
    "Role",
    "ModelCapabilities",
    "ModelDescriptor",
]
