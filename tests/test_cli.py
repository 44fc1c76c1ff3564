from pathlib import Path

import pytest
from docx import Document as DocxReader

from MarkdownLens import cli
from MarkdownLens.model import Paragraph
from MarkdownLens.utils import load_document, resolve_output_path


def test_load_document_reports_decode_failure(tmp_path: Path):
    broken = tmp_path / "broken.md"
    broken.write_bytes(b"# ok\n\xff\xfe not utf-8")
    document = load_document(broken)
    assert document.metadata["error"] is True
    assert len(document.blocks) == 1
    assert isinstance(document.blocks[0], Paragraph)
    assert document.blocks[0].text.startswith("Error loading file:")


def test_load_document_reports_missing_file(tmp_path: Path):
    document = load_document(tmp_path / "absent.md")
    assert document.blocks[0].text.startswith("Error loading file:")


def test_resolve_output_path(tmp_path: Path):
    source = tmp_path / "notes.md"
    assert resolve_output_path(source, None) == tmp_path / "notes.docx"
    assert resolve_output_path(source, str(tmp_path)) == tmp_path / "notes.docx"
    assert resolve_output_path(source, "other.docx") == Path("other.docx")


def test_cli_renders_docx(tmp_path: Path):
    source = tmp_path / "notes.md"
    source.write_text("# Notes\n\nBody", encoding="utf-8")
    cli.main([str(source), "--theme", "macos"])
    output = tmp_path / "notes.docx"
    assert output.exists()
    assert DocxReader(output).paragraphs[0].text == "Notes"


def test_cli_dump(tmp_path: Path, capsys):
    source = tmp_path / "notes.md"
    source.write_text("#Notes\n- one\n```sh\nls\n```", encoding="utf-8")
    cli.main([str(source), "--dump", "--header-mode", "lenient"])
    lines = capsys.readouterr().out.splitlines()
    assert lines == ["heading[1] Notes", "item one", "code[sh] 1 line(s)"]
    assert not (tmp_path / "notes.docx").exists()


def test_cli_records_recent_files(tmp_path: Path, capsys):
    source = tmp_path / "notes.md"
    source.write_text("text", encoding="utf-8")
    config = tmp_path / "lens.yaml"
    config.write_text(f"recent_file: {tmp_path / 'recent.yaml'}\n", encoding="utf-8")

    cli.main([str(source), "--dump", "--config", str(config)])
    capsys.readouterr()
    cli.main(["--recent", "--config", str(config)])
    out = capsys.readouterr().out
    assert "notes.md" in out


def test_cli_missing_input(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        cli.main([str(tmp_path / "nope.md")])


def test_theme_help_lists_display_names():
    help_text = " ".join(cli.build_parser().format_help().split())
    assert "Game Boy" in help_text
    assert "Deep Blue" in help_text
