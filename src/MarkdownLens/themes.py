from __future__ import annotations

from dataclasses import dataclass

from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Cm, Pt, RGBColor

A4_WIDTH_MM = 210
A4_HEIGHT_MM = 297
MARGIN_PT = 40

FONT_NAME = "Courier New"
BODY_SIZE_PT = 15
CODE_SIZE_PT = 14
KEYWORD_SIZE_PT = 13
LABEL_SIZE_PT = 11
HEADING_SIZES_PT = (32, 28, 24, 20, 18, 16)
BLOCK_SPACING_PT = 10
SPACER_HEIGHT_PT = 8
QUOTE_BAR_WIDTH_EIGHTHS = 32  # 4pt, in eighths of a point
LIST_INDENT_CM = 0.6

DEFAULT_THEME = "gameboy"

# Schema successors, so inserted elements land in a valid position.
_PPR_AFTER_SHD = (
    "w:tabs", "w:suppressAutoHyphens", "w:kinsoku", "w:wordWrap", "w:overflowPunct",
    "w:topLinePunct", "w:autoSpaceDE", "w:autoSpaceDN", "w:bidi", "w:adjustRightInd",
    "w:snapToGrid", "w:spacing", "w:ind", "w:contextualSpacing", "w:mirrorIndents",
    "w:suppressOverlap", "w:jc", "w:textDirection", "w:textAlignment",
    "w:textboxTightWrap", "w:outlineLvl", "w:divId", "w:cnfStyle", "w:rPr",
    "w:sectPr", "w:pPrChange",
)
_RPR_AFTER_SHD = (
    "w:fitText", "w:vertAlign", "w:rtl", "w:cs", "w:em", "w:lang",
    "w:eastAsianLayout", "w:specVanish", "w:oMath",
)


@dataclass(frozen=True)
class Theme:
    name: str
    background: RGBColor
    text_primary: RGBColor
    text_secondary: RGBColor
    accent: RGBColor
    code_background: RGBColor
    code_text: RGBColor


THEMES: dict[str, Theme] = {
    "gameboy": Theme(
        name="Game Boy",
        background=RGBColor(0x9B, 0xBC, 0x0F),
        text_primary=RGBColor(0x0F, 0x38, 0x0F),
        text_secondary=RGBColor(0x30, 0x62, 0x30),
        accent=RGBColor(0x8B, 0xAC, 0x0F),
        code_background=RGBColor(0x0F, 0x38, 0x0F),
        code_text=RGBColor(0x9B, 0xBC, 0x0F),
    ),
    "macos": Theme(
        name="macOS",
        background=RGBColor(0xFF, 0xFF, 0xFF),
        text_primary=RGBColor(0x1D, 0x1D, 0x1F),
        text_secondary=RGBColor(0x6E, 0x6E, 0x73),
        accent=RGBColor(0x00, 0x7A, 0xFF),
        code_background=RGBColor(0xF2, 0xF2, 0xF7),
        code_text=RGBColor(0x1D, 0x1D, 0x1F),
    ),
    "deepblue": Theme(
        name="Deep Blue",
        background=RGBColor(0x05, 0x10, 0xF5),
        text_primary=RGBColor(0xFF, 0xFF, 0xFF),
        text_secondary=RGBColor(0xCC, 0xCC, 0xCC),
        accent=RGBColor(0x99, 0x99, 0x99),
        code_background=RGBColor(0x00, 0x00, 0x00),
        code_text=RGBColor(0xFF, 0xFF, 0xFF),
    ),
}


def get_theme(name: str) -> Theme:
    key = name.strip().lower().replace(" ", "")
    try:
        return THEMES[key]
    except KeyError:
        raise ValueError(f"Unknown theme {name!r}; expected one of: {', '.join(THEMES)}") from None


def heading_size(level: int) -> int:
    return HEADING_SIZES_PT[min(max(level, 1), len(HEADING_SIZES_PT)) - 1]


def apply_page_layout(doc, theme: Theme) -> None:
    """Apply A4 page setup, margins and the theme page colour."""
    section = doc.sections[0]
    section.page_height = Cm(A4_HEIGHT_MM / 10)
    section.page_width = Cm(A4_WIDTH_MM / 10)
    section.left_margin = Pt(MARGIN_PT)
    section.right_margin = Pt(MARGIN_PT)
    section.top_margin = Pt(MARGIN_PT)
    section.bottom_margin = Pt(MARGIN_PT)

    background = OxmlElement("w:background")
    background.set(qn("w:color"), str(theme.background))
    doc.element.insert(0, background)

    # Word ignores w:background unless the settings ask for it
    settings = doc.settings.element
    display = OxmlElement("w:displayBackgroundShape")
    zoom = settings.find(qn("w:zoom"))
    if zoom is not None:
        zoom.addnext(display)
    else:
        settings.insert(0, display)


def set_run_font(
    run,
    size: int = BODY_SIZE_PT,
    color: RGBColor | None = None,
    bold: bool = False,
    italic: bool = False,
) -> None:
    run.font.name = FONT_NAME
    run.font.size = Pt(size)
    run.bold = bold
    run.italic = italic
    if color is not None:
        run.font.color.rgb = color


def shade_run(run, fill: RGBColor) -> None:
    r_pr = run._r.get_or_add_rPr()
    r_pr.insert_element_before(_shading(fill), *_RPR_AFTER_SHD)


def shade_paragraph(paragraph, fill: RGBColor) -> None:
    p_pr = paragraph._p.get_or_add_pPr()
    p_pr.insert_element_before(_shading(fill), *_PPR_AFTER_SHD)


def add_left_bar(paragraph, color: RGBColor) -> None:
    """Draw the block-quote bar as a left paragraph border."""
    p_pr = paragraph._p.get_or_add_pPr()
    borders = OxmlElement("w:pBdr")
    left = OxmlElement("w:left")
    left.set(qn("w:val"), "single")
    left.set(qn("w:sz"), str(QUOTE_BAR_WIDTH_EIGHTHS))
    left.set(qn("w:space"), "12")
    left.set(qn("w:color"), str(color))
    borders.append(left)
    p_pr.insert_element_before(borders, "w:shd", *_PPR_AFTER_SHD)


def apply_block_format(paragraph, space_before: int = 0, space_after: int = BLOCK_SPACING_PT) -> None:
    paragraph.alignment = WD_ALIGN_PARAGRAPH.LEFT
    paragraph.paragraph_format.space_before = Pt(space_before)
    paragraph.paragraph_format.space_after = Pt(space_after)
    paragraph.paragraph_format.first_line_indent = Cm(0)


def _shading(fill: RGBColor):
    shd = OxmlElement("w:shd")
    shd.set(qn("w:val"), "clear")
    shd.set(qn("w:color"), "auto")
    shd.set(qn("w:fill"), str(fill))
    return shd
