"""Pydantic models for chat messages delivered by a host.

The router itself accepts any object (or mapping) with ``type`` and
``content``; these models are what the bundled console host produces.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class MessageType(str, Enum):
    """Kinds of chat message a tabletop chat host delivers.

    Only API messages are considered by the router.
    """
    GENERAL = "general"
    ROLL_RESULT = "rollresult"
    GM_ROLL_RESULT = "gmrollresult"
    EMOTE = "emote"
    WHISPER = "whisper"
    DESC = "desc"
    API = "api"


class ChatMessage(BaseModel):
    """A single chat message.

    Attributes:
        type: Message kind.
        content: Raw message text.
        who: Display name of the sender, if known.
        playerid: Host-specific sender id, if known.
    """
    type: MessageType
    content: str
    who: Optional[str] = None
    playerid: Optional[str] = None
