import base64
from pathlib import Path

import pytest
from docx import Document as DocxReader
from docx.oxml.ns import qn

from MarkdownLens import markdown_parser
from MarkdownLens.model import CodeBlock, Document, ImageBlock, Paragraph
from MarkdownLens.renderer_docx import render_document

PIXEL_PNG = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)

SAMPLE = """# Title
Some **bold** and `code` text
- item
> quote
```python
def f():
    return 1
```

![logo](logo.png)
![remote](https://example.com/a.png)"""


def test_render_creates_docx(tmp_path: Path):
    (tmp_path / "logo.png").write_bytes(PIXEL_PNG)
    doc = markdown_parser.parse_markdown(SAMPLE)
    output_file = tmp_path / "out" / "report.docx"
    render_document(doc, output_file, asset_root=tmp_path)
    assert output_file.exists()

    reader = DocxReader(output_file)
    texts = [p.text for p in reader.paragraphs]
    assert texts == [
        "Title",
        "Some bold and code text",
        "•  item",
        "quote",
        "PYTHON",
        "def f():\n    return 1",
        "",
        "",
        "[Image: remote (https://example.com/a.png)]",
    ]
    assert len(reader.inline_shapes) == 1


def test_inline_styles_become_runs(tmp_path: Path):
    doc = markdown_parser.parse_markdown("Some **bold** and *soft* words")
    out = tmp_path / "inline.docx"
    render_document(doc, out)
    runs = DocxReader(out).paragraphs[0].runs
    assert [(r.text, bool(r.bold), bool(r.italic)) for r in runs] == [
        ("Some ", False, False),
        ("bold", True, False),
        (" and ", False, False),
        ("soft", False, True),
        (" words", False, False),
    ]


def test_code_keywords_are_bold(tmp_path: Path):
    doc = Document(blocks=(CodeBlock(code="const x = 1;\nreturn x", language="JS"),))
    out = tmp_path / "code.docx"
    render_document(doc, out, theme="macos")
    paragraphs = DocxReader(out).paragraphs
    assert paragraphs[0].text == "JS"
    bold_words = [r.text for r in paragraphs[1].runs if r.bold]
    assert bold_words == ["const", "return"]


def test_missing_local_image_gets_placeholder(tmp_path: Path):
    doc = Document(blocks=(ImageBlock(url="missing.png", alt=""),))
    out = tmp_path / "img.docx"
    render_document(doc, out, asset_root=tmp_path)
    assert DocxReader(out).paragraphs[0].text == "[Image: missing.png]"


def test_theme_sets_page_background(tmp_path: Path):
    out = tmp_path / "theme.docx"
    render_document(Document(blocks=(Paragraph(text="hi"),)), out, theme="deepblue")
    background = DocxReader(out).element.find(qn("w:background"))
    assert background is not None
    assert background.get(qn("w:color")) == "0510F5"


def test_unknown_theme_raises(tmp_path: Path):
    with pytest.raises(ValueError):
        render_document(Document(blocks=()), tmp_path / "x.docx", theme="sepia")
