"""
Tests for the md2marp command-line interface.
"""

import pytest
from md2marp import cli


@pytest.fixture(autouse=True)
def no_dotenv(monkeypatch):
    monkeypatch.setattr(cli, "load_dotenv", lambda: None)


def test_convert_without_summarization(tmp_path, capsys):
    """Test a plain conversion writes the Marp file and exits 0."""
    input_path = tmp_path / "slides.md"
    input_path.write_text("# Hello\nWorld\n", encoding="utf-8")

    code = cli.main([str(input_path), "--no-summarize", "--theme", "gaia"])

    assert code == 0
    output = (tmp_path / "slides_marp.md").read_text(encoding="utf-8")
    assert output == "---\nmarp: true\ntheme: gaia\n---\n# Hello\n\nWorld\n\n"
    assert "[SUCCESS] Marp file generated" in capsys.readouterr().out


def test_default_input(tmp_path, monkeypatch, capsys):
    """Test example.md is used when no input is given."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "example.md").write_text("# Example\ntext\n", encoding="utf-8")

    code = cli.main(["--no-summarize"])

    assert code == 0
    assert (tmp_path / "example_marp.md").exists()
    assert "[INFO] No filename input. Use example.md" in capsys.readouterr().out


def test_missing_input(tmp_path, capsys):
    """Test a missing input file exits 1."""
    code = cli.main([str(tmp_path / "nope.md"), "--no-summarize"])

    assert code == 1
    assert "Input file not found" in capsys.readouterr().err


def test_missing_api_key(tmp_path, monkeypatch, capsys):
    """Test summarizing without an API key exits 1 with a message."""
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    input_path = tmp_path / "slides.md"
    input_path.write_text("# Hello\nWorld\n", encoding="utf-8")

    code = cli.main([str(input_path)])

    assert code == 1
    assert "GEMINI_API_KEY" in capsys.readouterr().err
    assert not (tmp_path / "slides_marp.md").exists()


def test_unknown_theme(tmp_path, capsys):
    """Test an unknown theme exits 1."""
    input_path = tmp_path / "slides.md"
    input_path.write_text("# Hello\n", encoding="utf-8")

    assert cli.main([str(input_path), "--no-summarize", "--theme", "sparkly"]) == 1
    assert "Unknown theme" in capsys.readouterr().err


def test_list_themes(capsys):
    """Test --list-themes prints the theme registry."""
    assert cli.main(["--list-themes"]) == 0

    out = capsys.readouterr().out
    assert "0: default" in out
    assert "theme: gaia" in out


def test_invalid_batch_size(tmp_path, capsys):
    """Test an out-of-range batch size exits 1, with or without summarization."""
    input_path = tmp_path / "slides.md"
    input_path.write_text("# Hello\n", encoding="utf-8")

    assert cli.main([str(input_path), "--no-summarize", "--batch-size", "99"]) == 1
    assert "batch_size" in capsys.readouterr().err
    assert not (tmp_path / "slides_marp.md").exists()
