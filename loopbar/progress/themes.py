"""Glyph tables for the progress bar.

Each theme is nine fill glyphs, indexed 0 (empty) to 8 (full), plus the
boundary glyph drawn after the bar. Extended themes use box-drawing,
geometric and braille characters; every theme also has an ASCII-only
variant for terminals that cannot render them.
"""

from enum import Enum
from typing import NamedTuple, Tuple, Union


class GlyphTable(NamedTuple):
    bars: Tuple[str, ...]
    right_pad: str

    @property
    def empty(self) -> str:
        return self.bars[0]

    @property
    def full(self) -> str:
        return self.bars[8]


class Theme(Enum):
    BLOCKS = 'blocks'
    BASIC = 'basic'
    LINE = 'line'
    CIRCLE = 'circle'
    BRAILLE = 'braille'
    BRAILLE_SPIN = 'braille-spin'
    VERTICAL = 'vertical'

    @classmethod
    def parse(cls, name: Union['Theme', str]) -> 'Theme':
        """Resolve a Theme from an enum member or a name like 'braille_spin'."""
        if isinstance(name, cls):
            return name
        key = str(name).strip().lower().replace('_', '-')
        for theme in cls:
            if theme.value == key:
                return theme
        valid = ', '.join(t.value for t in cls)
        raise ValueError(f"Unknown theme '{name}' (expected one of: {valid})")


_PAD = '▏'

_BASIC = GlyphTable((' ', '\\', '-', '/', '|', '\\', '-', '/', '|'), '|')

EXTENDED = {
    Theme.BLOCKS: GlyphTable(
        (' ', '▏', '▎', '▍', '▌', '▋', '▊', '▉', '█'),
        _PAD),
    Theme.BASIC: _BASIC,
    Theme.LINE: GlyphTable(
        ('─', '─', '─', '╾', '╾', '╾', '╾', '━', '═'),
        _PAD),
    Theme.CIRCLE: GlyphTable(
        (' ', '◓', '◑', '◒', '◐', '◓', '◑', '◒', '#'),
        _PAD),
    Theme.BRAILLE: GlyphTable(
        (' ', '⡀', '⡄', '⡆', '⡇', '⡏', '⡟', '⡿', '⣿'),
        _PAD),
    Theme.BRAILLE_SPIN: GlyphTable(
        (' ', '⠙', '⠹', '⠸', '⠼', '⠴', '⠦', '⠇', '⠿'),
        _PAD),
    Theme.VERTICAL: GlyphTable(
        ('▁', '▂', '▃', '▄', '▅', '▆', '▇', '█', '█'),
        _PAD),
}

ASCII = {
    Theme.BLOCKS: _BASIC,
    Theme.BASIC: _BASIC,
    Theme.LINE: GlyphTable((' ', '_', '_', '_', '-', '-', '-', '-', '='), '|'),
    Theme.CIRCLE: GlyphTable((' ', '.', '.', '.', 'o', 'o', 'o', 'o', 'O'), '|'),
    Theme.BRAILLE: _BASIC,
    Theme.BRAILLE_SPIN: _BASIC,
    Theme.VERTICAL: GlyphTable((' ', '.', '.', '.', ':', ':', ':', ':', '|'), '|'),
}


def glyphs_for(theme: Union[Theme, str], extended: bool = True) -> GlyphTable:
    """Glyph table for a theme, ASCII-only when extended is False."""
    theme = Theme.parse(theme)
    return (EXTENDED if extended else ASCII)[theme]
