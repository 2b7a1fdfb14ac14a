"""
PDF export via reportlab platypus
"""
import io
import logging
from typing import List, Optional
from xml.sax.saxutils import escape

from reportlab.lib.colors import HexColor
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import (
    ListFlowable,
    ListItem,
    Paragraph,
    Preformatted,
    SimpleDocTemplate,
    Spacer,
)

from .html_blocks import Block, Run, document_title, parse_html
from config import PDF_BODY_FONT, PDF_CODE_FONT, PDF_HEADING_FONT, PDF_MARGIN_POINTS

logger = logging.getLogger(__name__)

HEADING_SIZES = {1: 24, 2: 20, 3: 16, 4: 14, 5: 12, 6: 11}


def _build_styles() -> dict:
    base = getSampleStyleSheet()
    styles = {
        "body": ParagraphStyle(
            "DocBody",
            parent=base["BodyText"],
            fontName=PDF_BODY_FONT,
            fontSize=11,
            leading=16,
            spaceAfter=8,
            textColor=HexColor("#111111"),
        ),
        "quote": ParagraphStyle(
            "DocQuote",
            parent=base["BodyText"],
            fontName=PDF_BODY_FONT + "-Oblique",
            fontSize=11,
            leading=16,
            leftIndent=20,
            spaceAfter=8,
            textColor=HexColor("#444444"),
        ),
        "code": ParagraphStyle(
            "DocCode",
            parent=base["Code"],
            fontName=PDF_CODE_FONT,
            fontSize=9,
            leading=12,
            spaceAfter=8,
        ),
        "math": ParagraphStyle(
            "DocMath",
            parent=base["BodyText"],
            fontName=PDF_BODY_FONT + "-Oblique",
            fontSize=11,
            leading=16,
            alignment=TA_CENTER,
            spaceBefore=4,
            spaceAfter=10,
        ),
    }
    for level, size in HEADING_SIZES.items():
        styles[f"h{level}"] = ParagraphStyle(
            f"DocHeading{level}",
            parent=base["Heading1"],
            fontName=PDF_HEADING_FONT,
            fontSize=size,
            leading=size * 1.25,
            spaceBefore=size * 0.6,
            spaceAfter=size * 0.4,
            textColor=HexColor("#000000"),
        )
    return styles


def runs_to_markup(runs: List[Run]) -> str:
    """Convert runs to reportlab paragraph markup"""
    parts = []
    for run in runs:
        if run.text == "\n":
            parts.append("<br/>")
            continue

        # Formulas cannot be typeset here, so keep their LaTeX source
        text = escape(run.text).replace("\n", "<br/>")
        if run.code:
            text = f'<font face="{PDF_CODE_FONT}">{text}</font>'
        if run.bold:
            text = f"<b>{text}</b>"
        if run.italic or run.math:
            text = f"<i>{text}</i>"
        if run.underline:
            text = f"<u>{text}</u>"
        if run.href:
            href = escape(run.href, {'"': "&quot;"})
            text = f'<a href="{href}" color="blue">{text}</a>'
        parts.append(text)
    return "".join(parts)


def _block_flowables(block: Block, styles: dict) -> list:
    if block.kind == "heading":
        level = min(max(block.level, 1), 6)
        return [Paragraph(runs_to_markup(block.runs), styles[f"h{level}"])]
    if block.kind == "list":
        items = [ListItem(Paragraph(runs_to_markup(item), styles["body"])) for item in block.items]
        return [ListFlowable(
            items,
            bulletType="1" if block.ordered else "bullet",
            start=1 if block.ordered else None,
            leftIndent=18 * (block.level + 1),
        )]
    if block.kind == "quote":
        return [Paragraph(runs_to_markup(block.runs), styles["quote"])]
    if block.kind == "code":
        return [Preformatted(block.text, styles["code"])]
    if block.kind == "math":
        return [Paragraph(escape(block.text), styles["math"])]
    return [Paragraph(runs_to_markup(block.runs), styles["body"])]


def export_pdf(html: str, title: Optional[str] = None) -> bytes:
    """Render editor HTML as an A4 PDF"""
    blocks = parse_html(html)
    styles = _build_styles()

    story = []
    for block in blocks:
        story.extend(_block_flowables(block, styles))
    if not story:
        story.append(Spacer(1, 1))

    buffer = io.BytesIO()
    document = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=PDF_MARGIN_POINTS,
        rightMargin=PDF_MARGIN_POINTS,
        topMargin=PDF_MARGIN_POINTS,
        bottomMargin=PDF_MARGIN_POINTS,
        title=title or document_title(blocks),
    )
    document.build(story)

    logger.info(f"Exported {len(blocks)} blocks to PDF ({buffer.tell()} bytes)")
    return buffer.getvalue()
