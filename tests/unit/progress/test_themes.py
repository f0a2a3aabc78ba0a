"""Tests for loopbar.progress.themes module."""

import pytest

from loopbar.progress.themes import ASCII, EXTENDED, GlyphTable, Theme, glyphs_for


class TestThemeParse:
    """Tests for Theme.parse()."""

    @pytest.mark.parametrize("name, theme", [
        ("basic", Theme.BASIC),
        ("LINE", Theme.LINE),
        ("braille-spin", Theme.BRAILLE_SPIN),
        ("braille_spin", Theme.BRAILLE_SPIN),
        (" vertical ", Theme.VERTICAL),
        (Theme.CIRCLE, Theme.CIRCLE),
    ])
    def test_accepts_names(self, name, theme):
        assert Theme.parse(name) is theme

    def test_unknown_name_lists_choices(self):
        with pytest.raises(ValueError) as exc_info:
            Theme.parse("rainbow")
        assert "braille-spin" in str(exc_info.value)


class TestGlyphTables:
    """Tests for the built-in glyph tables."""

    @pytest.mark.parametrize("table", list(EXTENDED.values()) + list(ASCII.values()))
    def test_nine_single_cell_glyphs(self, table):
        assert isinstance(table, GlyphTable)
        assert len(table.bars) == 9
        assert all(len(glyph) == 1 for glyph in table.bars)
        assert len(table.right_pad) == 1

    def test_every_theme_has_both_variants(self):
        assert set(EXTENDED) == set(Theme)
        assert set(ASCII) == set(Theme)

    @pytest.mark.parametrize("theme", list(Theme))
    def test_ascii_variants_are_ascii(self, theme):
        table = glyphs_for(theme, extended=False)
        text = "".join(table.bars) + table.right_pad
        assert text.isascii()

    def test_blocks_default(self):
        table = glyphs_for("blocks")
        assert table.empty == " "
        assert table.full == "█"
        assert table.right_pad == "▏"

    def test_basic_boundary(self):
        assert glyphs_for(Theme.BASIC).right_pad == "|"

    def test_ascii_fallbacks(self):
        assert glyphs_for(Theme.BRAILLE, extended=False) == glyphs_for(Theme.BASIC)
        assert glyphs_for(Theme.CIRCLE, extended=False).full == "O"

    def test_tables_are_immutable(self):
        table = glyphs_for(Theme.LINE)
        with pytest.raises(AttributeError):
            table.right_pad = "#"
        with pytest.raises(TypeError):
            table.bars[0] = "#"
