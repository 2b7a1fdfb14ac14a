"""
Editor HTML to a flat block model shared by the PDF and Word exporters
"""
import logging
import re
from dataclasses import dataclass, field, replace
from typing import List, Optional

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

logger = logging.getLogger(__name__)

# \( inline \) and \[ display \]
MATH_RE = re.compile(r"\\\((.+?)\\\)|\\\[(.+?)\\\]", re.DOTALL)
_WHITESPACE_RE = re.compile(r"\s+")

HEADING_TAGS = {"h1": 1, "h2": 2, "h3": 3, "h4": 4, "h5": 5, "h6": 6}
LIST_TAGS = {"ul", "ol"}
CONTAINER_TAGS = {"html", "body", "div", "section", "article", "main", "header", "footer", "figure"}
SKIPPED_TAGS = {"script", "style", "head", "title", "meta", "img", "svg", "hr"}


@dataclass
class Run:
    text: str
    bold: bool = False
    italic: bool = False
    underline: bool = False
    code: bool = False
    href: Optional[str] = None
    math: bool = False
    display: bool = False


@dataclass
class Block:
    kind: str  # heading, paragraph, list, quote, code, math
    runs: List[Run] = field(default_factory=list)
    level: int = 0
    ordered: bool = False
    items: List[List[Run]] = field(default_factory=list)
    text: str = ""


def split_math(text: str, style: Run) -> List[Run]:
    """Split a text node into plain and LaTeX runs carrying the given style"""
    runs = []
    position = 0
    for match in MATH_RE.finditer(text):
        if match.start() > position:
            runs.append(replace(style, text=text[position:match.start()]))
        inline, display = match.group(1), match.group(2)
        runs.append(replace(
            style,
            text=(inline if inline is not None else display).strip(),
            math=True,
            display=display is not None
        ))
        position = match.end()
    if position < len(text):
        runs.append(replace(style, text=text[position:]))
    return runs


def inline_runs(node, style: Optional[Run] = None) -> List[Run]:
    """Collect formatted runs from an inline subtree"""
    style = style or Run(text="")

    if isinstance(node, Comment):
        return []
    if isinstance(node, NavigableString):
        text = _WHITESPACE_RE.sub(" ", str(node))
        return split_math(text, style) if text else []
    if not isinstance(node, Tag) or node.name in SKIPPED_TAGS:
        return []

    name = node.name
    if name == "br":
        return [replace(style, text="\n")]
    if name in ("b", "strong"):
        style = replace(style, bold=True)
    elif name in ("i", "em", "cite"):
        style = replace(style, italic=True)
    elif name in ("u", "ins"):
        style = replace(style, underline=True)
    elif name in ("code", "kbd", "samp", "tt"):
        style = replace(style, code=True)
    elif name == "a" and node.get("href"):
        style = replace(style, href=node["href"])

    runs = []
    for child in node.children:
        runs.extend(inline_runs(child, style))
    if name in ("p", "div", "li") and runs:
        runs.append(replace(style, text=" "))
    return runs


def _clean_runs(runs: List[Run]) -> List[Run]:
    """Trim outer whitespace and drop empty runs"""
    cleaned = [run for run in runs if run.text]
    while cleaned and not cleaned[0].math and not cleaned[0].text.strip():
        cleaned.pop(0)
    while cleaned and not cleaned[-1].math and not cleaned[-1].text.strip():
        cleaned.pop()
    if cleaned and not cleaned[0].math:
        cleaned[0] = replace(cleaned[0], text=cleaned[0].text.lstrip())
    if cleaned and not cleaned[-1].math:
        cleaned[-1] = replace(cleaned[-1], text=cleaned[-1].text.rstrip())
    return cleaned


def _emit_text_block(kind: str, runs: List[Run], blocks: List[Block], level: int = 0) -> None:
    """Append a paragraph-like block, lifting display math into its own blocks"""
    pending: List[Run] = []
    for run in runs:
        if run.math and run.display:
            cleaned = _clean_runs(pending)
            if cleaned:
                blocks.append(Block(kind=kind, runs=cleaned, level=level))
            blocks.append(Block(kind="math", text=run.text))
            pending = []
        else:
            pending.append(run)
    cleaned = _clean_runs(pending)
    if cleaned:
        blocks.append(Block(kind=kind, runs=cleaned, level=level))


def _emit_list(node: Tag, blocks: List[Block], depth: int) -> None:
    block = Block(kind="list", ordered=node.name == "ol", level=depth)
    nested: List[Tag] = []
    for item in node.find_all("li", recursive=False):
        runs = []
        for child in item.children:
            if isinstance(child, Tag) and child.name in LIST_TAGS:
                nested.append(child)
                continue
            runs.extend(inline_runs(child))
        cleaned = _clean_runs(runs)
        if cleaned:
            block.items.append(cleaned)
    if block.items:
        blocks.append(block)
    for child in nested:
        _emit_list(child, blocks, depth + 1)


def _walk(container, blocks: List[Block]) -> None:
    pending: List[Run] = []

    def flush():
        nonlocal pending
        if pending:
            _emit_text_block("paragraph", pending, blocks)
            pending = []

    for node in container.children:
        if isinstance(node, Comment):
            continue
        if isinstance(node, NavigableString):
            pending.extend(inline_runs(node))
            continue
        if not isinstance(node, Tag):
            continue

        name = node.name
        if name in SKIPPED_TAGS:
            continue
        if name == "br":
            flush()
        elif name in HEADING_TAGS:
            flush()
            _emit_text_block("heading", inline_runs(node), blocks, level=HEADING_TAGS[name])
        elif name == "p":
            flush()
            _emit_text_block("paragraph", inline_runs(node), blocks)
        elif name in LIST_TAGS:
            flush()
            _emit_list(node, blocks, 0)
        elif name == "blockquote":
            flush()
            _emit_text_block("quote", inline_runs(node), blocks)
        elif name == "pre":
            flush()
            blocks.append(Block(kind="code", text=node.get_text().strip("\n")))
        elif name == "table":
            flush()
            for row in node.find_all("tr"):
                cells = [cell.get_text(" ", strip=True) for cell in row.find_all(["td", "th"])]
                if any(cells):
                    blocks.append(Block(kind="paragraph", runs=[Run(text=" | ".join(cells))]))
        elif name in CONTAINER_TAGS:
            flush()
            _walk(node, blocks)
        else:
            pending.extend(inline_runs(node))
    flush()


def parse_html(html: str) -> List[Block]:
    """Parse editor HTML into exportable blocks"""
    soup = BeautifulSoup(html or "", "html.parser")
    blocks: List[Block] = []
    _walk(soup, blocks)
    logger.debug(f"Parsed {len(blocks)} blocks from {len(html or '')} chars of HTML")
    return blocks


def document_title(blocks: List[Block], fallback: str = "document") -> str:
    """Text of the first heading, used when no explicit title is given"""
    for block in blocks:
        if block.kind == "heading":
            text = "".join(run.text for run in block.runs if not run.math).strip()
            if text:
                return text
    return fallback
