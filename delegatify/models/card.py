"""Chat message building blocks: cards, buttons, replies and the code form."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from delegatify.config import CODE_MAX_LENGTH, CODE_MIN_LENGTH

# Accent colours (RGB ints, same values Discord uses for BLUE / DARK_GREEN)
ACCENT_BLUE = 0x3498DB
ACCENT_DARK_GREEN = 0x1F8B4C


@dataclass
class CardField:
    name: str
    value: str
    inline: bool = False


@dataclass
class Card:
    """Rich card (embed) rendered by the chat platform."""
    title: str
    color: int
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None
    timestamp: Optional[datetime] = None
    footer: Optional[str] = None
    fields: List[CardField] = field(default_factory=list)

    def add_field(self, name: str, value: str, inline: bool = False) -> "Card":
        self.fields.append(CardField(name=name, value=value, inline=inline))
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "color": self.color,
            "description": self.description,
            "thumbnail_url": self.thumbnail_url,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "footer": self.footer,
            "fields": [
                {"name": f.name, "value": f.value, "inline": f.inline} for f in self.fields
            ],
        }


@dataclass
class Button:
    """Either a link button (url set) or a trigger button (action_id set)."""
    label: str
    url: Optional[str] = None
    action_id: Optional[str] = None
    style: str = "primary"

    @property
    def is_link(self) -> bool:
        return self.url is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "url": self.url,
            "action_id": self.action_id,
            "style": self.style,
        }


@dataclass
class Reply:
    """One outgoing message: plain text, a card, or both, plus buttons."""
    text: Optional[str] = None
    card: Optional[Card] = None
    buttons: List[Button] = field(default_factory=list)
    ephemeral: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "card": self.card.to_dict() if self.card else None,
            "buttons": [b.to_dict() for b in self.buttons],
            "ephemeral": self.ephemeral,
        }


@dataclass(frozen=True)
class ActionEvent:
    """A user pressed a trigger button."""
    action_id: str
    user_id: str


@dataclass(frozen=True)
class CodeForm:
    """Modal with a single text input for the OAuth exchange code."""
    title: str = "Spotify Authentication"
    label: str = "Paste the code that you received here"
    min_length: int = CODE_MIN_LENGTH
    max_length: int = CODE_MAX_LENGTH

    def validate(self, value: Optional[str]) -> Optional[str]:
        """Return the stripped code if its length is within bounds, else None."""
        if value is None:
            return None
        code = value.strip()
        if not self.min_length <= len(code) <= self.max_length:
            return None
        return code

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "label": self.label,
            "min_length": self.min_length,
            "max_length": self.max_length,
        }
