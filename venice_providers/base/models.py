"""Vendor-agnostic DTOs for the adapter layer.

Re-exports the one-class-per-file implementations under
``venice_providers.base.models_parts`` to keep a stable import path.
"""

from .models_parts import (
    ContentPart,
    ContentPartType,
    Message,
    ModelCapabilities,
    ModelDescriptor,
    Role,
)

__all__ = [
    "ContentPart",
    "ContentPartType",
    "Message",
    "Role",
    "ModelCapabilities",
    "ModelDescriptor",
]
