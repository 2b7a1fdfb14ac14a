"""
Word exports: native .docx via python-docx and the Word-compatible HTML .doc
"""
import io
import logging
import re
from html import escape, unescape
from typing import List, Optional

from docx import Document
from docx.opc.constants import RELATIONSHIP_TYPE as RT
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Pt

from .html_blocks import Block, Run, document_title, parse_html
from .latex_omml import M_NS, latex_to_omml, latex_to_omml_string
from config import EXPORT_FONT_NAME

logger = logging.getLogger(__name__)

CODE_FONT = "Courier New"
LINK_COLOR = "0563C1"
MAX_LIST_DEPTH = 3

_INLINE_MATH_RE = re.compile(r"\\\((.*?)\\\)", re.DOTALL)
_DISPLAY_MATH_RE = re.compile(r"\\\[(.*?)\\\]", re.DOTALL)


def _add_hyperlink(paragraph, run: Run) -> None:
    """python-docx has no hyperlink API, so build w:hyperlink by hand"""
    r_id = paragraph.part.relate_to(run.href, RT.HYPERLINK, is_external=True)
    hyperlink = OxmlElement("w:hyperlink")
    hyperlink.set(qn("r:id"), r_id)

    new_run = OxmlElement("w:r")
    properties = OxmlElement("w:rPr")
    if run.bold:
        properties.append(OxmlElement("w:b"))
    if run.italic:
        properties.append(OxmlElement("w:i"))
    color = OxmlElement("w:color")
    color.set(qn("w:val"), LINK_COLOR)
    properties.append(color)
    underline = OxmlElement("w:u")
    underline.set(qn("w:val"), "single")
    properties.append(underline)
    new_run.append(properties)

    text = OxmlElement("w:t")
    text.text = run.text
    text.set(qn("xml:space"), "preserve")
    new_run.append(text)

    hyperlink.append(new_run)
    paragraph._p.append(hyperlink)


def _add_runs(paragraph, runs: List[Run]) -> None:
    for run in runs:
        if run.math:
            paragraph._p.append(latex_to_omml(run.text))
            continue
        if run.href:
            _add_hyperlink(paragraph, run)
            continue

        added = paragraph.add_run(run.text)
        if run.bold:
            added.bold = True
        if run.italic:
            added.italic = True
        if run.underline:
            added.underline = True
        if run.code:
            added.font.name = CODE_FONT


def _list_style(block: Block) -> str:
    base = "List Number" if block.ordered else "List Bullet"
    depth = min(block.level, MAX_LIST_DEPTH - 1)
    return base if depth == 0 else f"{base} {depth + 1}"


def _add_block(document, block: Block) -> None:
    if block.kind == "heading":
        paragraph = document.add_heading(level=min(max(block.level, 1), 9))
        _add_runs(paragraph, block.runs)
    elif block.kind == "list":
        style = _list_style(block)
        for item in block.items:
            _add_runs(document.add_paragraph(style=style), item)
    elif block.kind == "quote":
        _add_runs(document.add_paragraph(style="Quote"), block.runs)
    elif block.kind == "code":
        run = document.add_paragraph(style="No Spacing").add_run(block.text)
        run.font.name = CODE_FONT
        run.font.size = Pt(9)
    elif block.kind == "math":
        document.add_paragraph()._p.append(latex_to_omml(block.text, display=True))
    else:
        _add_runs(document.add_paragraph(), block.runs)


def export_docx(html: str, title: Optional[str] = None) -> bytes:
    """Render editor HTML as a .docx file"""
    blocks = parse_html(html)

    document = Document()
    document.core_properties.title = title or document_title(blocks)
    document.styles["Normal"].font.name = EXPORT_FONT_NAME

    for block in blocks:
        _add_block(document, block)

    buffer = io.BytesIO()
    document.save(buffer)
    logger.info(f"Exported {len(blocks)} blocks to DOCX ({buffer.tell()} bytes)")
    return buffer.getvalue()


def export_word_html(html: str, title: Optional[str] = None) -> bytes:
    """
    Render editor HTML as a Word-compatible HTML document (.doc)
    LaTeX is replaced by inline OMML which Word renders as equations
    """
    content = html or ""
    # Formulas sit in HTML-escaped source; OMML text needs the raw characters
    content = _INLINE_MATH_RE.sub(lambda match: latex_to_omml_string(unescape(match.group(1))), content)
    content = _DISPLAY_MATH_RE.sub(
        lambda match: latex_to_omml_string(unescape(match.group(1)), display=True),
        content
    )

    header = (
        "<html xmlns:o='urn:schemas-microsoft-com:office:office' "
        "xmlns:w='urn:schemas-microsoft-com:office:word' "
        f"xmlns:m='{M_NS}' "
        "xmlns='http://www.w3.org/TR/REC-html40'>"
        "<head><meta charset='utf-8'>"
        f"<title>{escape(title or 'Export HTML to Word')}</title>"
        f"<style>body{{font-family: '{EXPORT_FONT_NAME}', serif;}} "
        f"h1,h2,h3,h4,h5,h6{{font-family: '{EXPORT_FONT_NAME}', serif;}}</style>"
        "</head><body>"
    )
    footer = "</body></html>"

    source = header + content + footer
    logger.info(f"Exported {len(content)} chars to Word HTML")
    return source.encode("utf-8")
