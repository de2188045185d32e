# this_file: tests/test_cli.py

"""Tests for the fire-based command line interface."""

import inspect
import json

import numpy as np
import pytest
from PIL import Image

from ogcard.cli import OgcardCLI, parse_color
from ogcard.constants import DEFAULT_BLEND_POLICY, DEFAULT_LAYOUT


class TestParseColor:
    """Test colour argument parsing."""

    def test_string(self):
        """Comma-separated strings are parsed."""
        assert parse_color("255,0,10", 3) == (255, 0, 10)

    def test_tuple(self):
        """Tuples (as produced by fire) are accepted."""
        assert parse_color((0, 0, 0, 0), 4) == (0, 0, 0, 0)

    def test_wrong_length(self):
        """Component count must match."""
        with pytest.raises(ValueError):
            parse_color("1,2,3", 4)

    def test_out_of_range(self):
        """Components must fit in a byte."""
        with pytest.raises(ValueError):
            parse_color("1,2,300", 3)


class TestCardCommand:
    """Test `ogcard card`."""

    def test_card(self, font_path, tmp_path):
        """A card PNG is written with the default size."""
        output = tmp_path / "card.png"
        cli = OgcardCLI()
        assert cli.card(str(font_path), str(output), text="Hello", title="Blog", author="me") == 0
        with Image.open(output) as image:
            assert image.size == (1200, 630)
            assert image.mode == "RGBA"

    def test_card_alpha_transparent(self, font_path, tmp_path):
        """Policy and background flags reach the renderer."""
        output = tmp_path / "card.png"
        cli = OgcardCLI()
        result = cli.card(
            str(font_path), str(output), text="Hi", title="T", author="A",
            policy="alpha", background="0,0,0,0", color="255,0,0",
        )
        assert result == 0
        pixels = np.array(Image.open(output))
        touched = pixels[..., 3] > 0
        assert touched.any()
        assert np.all(pixels[touched][:, :3] == (255, 0, 0))

    def test_card_missing_param(self, font_path, tmp_path, capsys):
        """Missing parameters fail with exit code 1."""
        output = tmp_path / "card.png"
        assert OgcardCLI().card(str(font_path), str(output), text="Hello", title="Blog") == 1
        assert "author parameter is required" in capsys.readouterr().err
        assert not output.exists()

    def test_card_text_too_long(self, font_path, tmp_path, capsys):
        """Over-long text fails with exit code 1."""
        output = tmp_path / "card.png"
        result = OgcardCLI().card(str(font_path), str(output), text="x" * 200, title="", author="")
        assert result == 1
        assert "too long" in capsys.readouterr().err

    def test_card_bad_font(self, tmp_path, capsys):
        """Unparseable fonts fail with exit code 1."""
        bad = tmp_path / "bad.ttf"
        bad.write_bytes(b"not a font at all")
        result = OgcardCLI().card(str(bad), str(tmp_path / "out.png"), text="a", title="b", author="c")
        assert result == 1
        assert "Error" in capsys.readouterr().err

    def test_card_missing_font_file(self, tmp_path):
        """Missing font files fail with exit code 1."""
        result = OgcardCLI().card(
            str(tmp_path / "nope.ttf"), str(tmp_path / "out.png"), text="a", title="b", author="c"
        )
        assert result == 1


class TestTextCommand:
    """Test `ogcard text`."""

    def test_text(self, font_path, tmp_path):
        """A single block is rendered."""
        output = tmp_path / "text.png"
        assert OgcardCLI().text(
            str(font_path), str(output), "Hello", size=40, x=0, y=0, width=300, height=100
        ) == 0
        pixels = np.array(Image.open(output))
        assert pixels.shape == (100, 300, 4)
        assert np.any(pixels[..., :3] != 255)

    def test_text_unknown_layout(self, font_path, tmp_path):
        """Unknown layouts fail with exit code 1."""
        result = OgcardCLI().text(str(font_path), str(tmp_path / "o.png"), "Hi", layout="nope")
        assert result == 1


class TestLayoutCommand:
    """Test `ogcard layout`."""

    def test_layout_json(self, font_path, capsys):
        """Glyph positions are printed as JSON."""
        assert OgcardCLI().layout(str(font_path), "Hello", size=70, x=80, y=230) == 0
        result = json.loads(capsys.readouterr().out)
        assert result["text"] == "Hello"
        assert len(result["glyphs"]) == 5
        assert result["glyphs"][0]["x"] == 80.0
        assert result["height"] == pytest.approx(70.0)

    def test_layout_wraps(self, font_path, capsys):
        """max_width is honoured."""
        assert OgcardCLI().layout(str(font_path), "A very long line of words", max_width=100) == 0
        result = json.loads(capsys.readouterr().out)
        assert len({g["y"] for g in result["glyphs"]}) >= 2

    def test_layout_kerning(self, font_path, capsys):
        """Kerned pairs show up in the printed positions."""
        assert OgcardCLI().layout(str(font_path), "AV", size=100, x=0, y=0) == 0
        glyphs = json.loads(capsys.readouterr().out)["glyphs"]
        assert glyphs[1]["x"] == pytest.approx(50.0)


class TestInfoCommands:
    """Test informational commands."""

    def test_policies(self, capsys):
        """Policies and layouts are listed."""
        assert OgcardCLI().policies() == 0
        out = capsys.readouterr().out
        for name in ("over", "alpha", "overflow", "words"):
            assert name in out

    def test_info(self, capsys):
        """Version is printed."""
        assert OgcardCLI().info() == 0
        assert "ogcard v" in capsys.readouterr().out

    def test_defaults_follow_constants(self):
        """Command defaults come from the shared constants."""
        for command in (OgcardCLI.card, OgcardCLI.text, OgcardCLI.layout):
            params = inspect.signature(command).parameters
            assert params["layout"].default == DEFAULT_LAYOUT
            if "policy" in params:
                assert params["policy"].default == DEFAULT_BLEND_POLICY
