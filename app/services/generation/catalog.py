"""Read-only style catalog built from the prompt definitions."""

from app.prompts import STYLE_DEFINITIONS
from app.schemas import StyleDescriptor

STYLES: tuple[StyleDescriptor, ...] = tuple(
    StyleDescriptor(**definition) for definition in STYLE_DEFINITIONS
)

_STYLES_BY_ID = {style.id: style for style in STYLES}


def get_style(style_id: str) -> StyleDescriptor:
    """Look up a catalog style. Raises KeyError for unknown ids."""
    return _STYLES_BY_ID[style_id]
