"""Chat message DTO."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Literal, Union

from .content_part import ContentPart

Role = Literal["system", "user", "assistant", "tool"]


@dataclass
class Message:
    """One conversation turn: plain text, or a list of :class:`ContentPart`."""

    role: Role
    content: Union[str, List[ContentPart]]


__all__ = [
    "Message",
    "Role",
]
