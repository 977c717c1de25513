"""
Deterministic placeholder images for prompts and categories.

Placeholders are ui-avatars URLs whose text and colour derive from the
prompt title, its tags and the author name, so the same prompt always
renders the same image.
"""

import logging
from urllib.parse import quote

from core.config import get_settings

logger = logging.getLogger(__name__)

# Keyword -> background colour (hex, no #). First tag containing a key wins.
TAG_COLORS: dict[str, str] = {
    "writing": "6366F1",
    "marketing": "EC4899",
    "ai": "8B5CF6",
    "blog": "14B8A6",
    "social-media": "F59E0B",
    "content": "10B981",
    "coding": "3B82F6",
    "programming": "3B82F6",
    "academic": "8B5CF6",
    "business": "6366F1",
    "creative": "EC4899",
    "data": "3B82F6",
    "education": "14B8A6",
    "design": "EC4899",
    "advertising": "F59E0B",
    "product": "6366F1",
    "travel": "10B981",
    "health": "14B8A6",
    "chatbot": "3B82F6",
    "customer-service": "F59E0B",
}

CATEGORY_PALETTE: list[str] = [
    "4338CA",
    "3B82F6",
    "06B6D4",
    "10B981",
    "059669",
    "65A30D",
    "CA8A04",
    "EA580C",
    "E11D48",
    "BE185D",
    "7E22CE",
    "6366F1",
]

MAX_DISPLAY_WORDS = 3
MAX_DISPLAY_CHARS = 20


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def string_hash(text: str) -> int:
    """32-bit shift-and-subtract string hash (hash * 31 + char, wrapping)."""
    h = 0
    for ch in text:
        h = ord(ch) + (_to_int32(_to_int32(h) << 5) - h)
    return h


def _hash_color(text: str) -> str:
    return format(abs(string_hash(text)), "x")[:6].ljust(6, "0")


def _display_text(title: str) -> str:
    words = title.split(" ")
    picked: list[str] = []
    char_count = 0
    for word in words[:MAX_DISPLAY_WORDS]:
        if char_count + len(word) > MAX_DISPLAY_CHARS:
            break
        picked.append(word)
        char_count += len(word)
    return " ".join(picked)


def generate_prompt_placeholder(title: str, user_name: str, tags: list[str] | None = None) -> str:
    """Build the placeholder URL for a prompt."""
    bg_color = ""
    for tag in tags or []:
        normalized = str(tag).lower()
        bg_color = next((color for key, color in TAG_COLORS.items() if key in normalized), "")
        if bg_color:
            break

    if not bg_color:
        bg_color = _hash_color(user_name)

    base_url = get_settings().placeholder_base_url
    return (
        f"{base_url}/?name={quote(_display_text(title), safe='')}"
        f"&background={bg_color}&color=fff&size=300&font-size=0.33&bold=true&length=20"
    )


def get_prompt_image_url(
    title: str | None,
    image: str | None,
    user_name: str | None,
    tags: list[str] | None = None,
) -> str:
    """The stored image when present, otherwise a generated placeholder. Never empty."""
    if isinstance(image, str) and image.strip():
        return image

    keywords = [t for t in (tags or []) if t]
    try:
        return generate_prompt_placeholder(
            title or "Untitled Prompt",
            user_name or "Unknown User",
            keywords,
        )
    except (TypeError, ValueError) as e:
        logger.warning("Falling back to simple placeholder for %r: %s", title, e)
        base_url = get_settings().placeholder_base_url
        bg_color = _hash_color(str(title or "Prompt"))
        return f"{base_url}/?name=AI+Prompt&background={bg_color}&color=fff&size=300&bold=true"


def category_image(name: str) -> str:
    """Placeholder image for a category, colour picked from a fixed palette."""
    color = CATEGORY_PALETTE[abs(string_hash(name)) % len(CATEGORY_PALETTE)]
    base_url = get_settings().placeholder_base_url
    return f"{base_url}/?name={quote(name, safe='')}&background={color}&color=fff&size=300&bold=true"
