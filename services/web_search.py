"""
Web search and page fetching for the auto researcher
Uses the Google Custom Search JSON API over httpx
"""
import io
import logging
import re
from dataclasses import dataclass
from typing import List, Optional

import httpx
from bs4 import BeautifulSoup
from pypdf import PdfReader

from config import (
    FETCH_TIMEOUT_SECONDS,
    GOOGLE_SEARCH_API_KEY,
    GOOGLE_SEARCH_ENGINE_ID,
    GOOGLE_SEARCH_URL,
)

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")
_NOISE_TAGS = ["script", "style", "noscript", "nav", "header", "footer", "aside", "form"]
_USER_AGENT = "Mozilla/5.0 (compatible; DocuCraftResearcher/1.0)"


class WebSearchNotConfigured(RuntimeError):
    """Raised when search credentials are missing"""


@dataclass
class SearchHit:
    title: str
    url: str
    snippet: str = ""


class WebSearchClient:
    """
    Thin client for searching and reading web sources
    Pass an httpx.Client to control transport (tests use httpx.MockTransport)
    """

    def __init__(
        self,
        api_key: str = GOOGLE_SEARCH_API_KEY,
        engine_id: str = GOOGLE_SEARCH_ENGINE_ID,
        http_client: Optional[httpx.Client] = None
    ):
        self.api_key = api_key
        self.engine_id = engine_id
        self._owns_client = http_client is None
        self.http = http_client or httpx.Client(
            timeout=FETCH_TIMEOUT_SECONDS,
            follow_redirects=True,
            headers={"User-Agent": _USER_AGENT}
        )

    def __enter__(self) -> "WebSearchClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self.http.close()

    def search(self, query: str, limit: int) -> List[SearchHit]:
        """Return up to `limit` search hits for the query"""
        if not self.api_key or not self.engine_id:
            raise WebSearchNotConfigured(
                "Web search is not configured: set GOOGLE_SEARCH_API_KEY and GOOGLE_SEARCH_ENGINE_ID"
            )

        logger.info(f"Searching the web for: {query[:100]}")
        response = self.http.get(
            GOOGLE_SEARCH_URL,
            params={
                "key": self.api_key,
                "cx": self.engine_id,
                "q": query,
                "num": max(1, min(limit, 10)),
            }
        )
        response.raise_for_status()

        hits = []
        for item in response.json().get("items", []):
            url = item.get("link")
            if not url:
                continue
            hits.append(SearchHit(
                title=item.get("title") or url,
                url=url,
                snippet=item.get("snippet", "")
            ))
            if len(hits) >= limit:
                break

        logger.info(f"Search returned {len(hits)} usable results")
        return hits

    def fetch_text(self, url: str, char_limit: int) -> str:
        """Download a page or PDF and return its readable text"""
        response = self.http.get(url)
        response.raise_for_status()

        # Decide by what the server sent; .pdf links often land on HTML paywalls
        content_type = response.headers.get("content-type", "").lower()
        if "application/pdf" in content_type or response.content.startswith(b"%PDF"):
            text = extract_pdf_text(response.content)
        else:
            text = extract_html_text(response.text)

        text = text[:char_limit]
        logger.info(f"Fetched {len(text)} chars from {url}")
        return text


def extract_html_text(html: str) -> str:
    """Readable text of an HTML page without scripts and page chrome"""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(_NOISE_TAGS):
        tag.decompose()

    root = soup.find("article") or soup.find("main") or soup.body or soup
    return _WHITESPACE_RE.sub(" ", root.get_text(" ", strip=True)).strip()


def extract_pdf_text(data: bytes) -> str:
    """Text of every PDF page joined by a space"""
    reader = PdfReader(io.BytesIO(data))
    pages = [page.extract_text() or "" for page in reader.pages]
    return _WHITESPACE_RE.sub(" ", " ".join(pages)).strip()
