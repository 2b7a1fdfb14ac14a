"""
Auto researcher flow
Searches for academic sources, summarizes each one and synthesizes an overview
"""
import logging
from typing import Any, Dict, List

import httpx
from pydantic import BaseModel
from pypdf.errors import PyPdfError

from .base import BaseFlow
from .runner import FlowRunner
from config import RESEARCH_QUERY_SUFFIX, RESEARCH_RESULT_LIMIT, SOURCE_CHAR_LIMIT
from models import AutoResearchResponse, ResearchResult
from prompts import (
    RESEARCH_SUMMARIZE_SYSTEM_PROMPT,
    RESEARCH_SUMMARIZE_USER_TEMPLATE,
    RESEARCH_SYNTHESIZE_SYSTEM_PROMPT,
    RESEARCH_SYNTHESIZE_USER_TEMPLATE,
)
from services.web_search import SearchHit, WebSearchClient
from utils.response_parser import validate_flow_output

logger = logging.getLogger(__name__)


class SourceSummary(BaseModel):
    summary: str


class ResearchSynthesis(BaseModel):
    overall_summary: str


class SummarizeSourceFlow(BaseFlow):
    """
    Flow for summarizing one fetched source
    """

    name = "summarizeUrlContent"

    def __init__(self, hit: SearchHit, content: str):
        super().__init__()
        self.hit = hit
        self.content = content

    def describe(self) -> str:
        return f"{self.name} for {self.hit.url}"

    def get_system_prompt(self) -> str:
        return RESEARCH_SUMMARIZE_SYSTEM_PROMPT

    def build_user_message(self) -> str:
        return RESEARCH_SUMMARIZE_USER_TEMPLATE.format(
            title=self.hit.title,
            url=self.hit.url,
            content=self.content
        )

    def validate_response(self, result: Dict[str, Any]) -> SourceSummary:
        output = validate_flow_output(SourceSummary, result)
        if not output.summary.strip():
            raise ValueError(f"Empty summary for {self.hit.url}")
        return output


class SynthesizeResearchFlow(BaseFlow):
    """
    Flow for combining per-source summaries into one overview
    """

    name = "autoResearcherFlow"

    def __init__(self, query: str, results: List[ResearchResult]):
        super().__init__()
        self.query = query
        self.results = results

    def combined_summaries(self) -> str:
        return "\n\n".join(
            f"Source: {result.title}\nSummary: {result.summary}" for result in self.results
        )

    def get_system_prompt(self) -> str:
        return RESEARCH_SYNTHESIZE_SYSTEM_PROMPT

    def build_user_message(self) -> str:
        return RESEARCH_SYNTHESIZE_USER_TEMPLATE.format(
            query=self.query,
            combined_summaries=self.combined_summaries()
        )

    def validate_response(self, result: Dict[str, Any]) -> ResearchSynthesis:
        return validate_flow_output(ResearchSynthesis, result)


def _summarize_hit(search: WebSearchClient, hit: SearchHit) -> ResearchResult:
    try:
        content = search.fetch_text(hit.url, SOURCE_CHAR_LIMIT)
    except (httpx.HTTPError, PyPdfError) as e:
        logger.warning(f"Could not read {hit.url} ({e}); summarizing the search snippet instead")
        content = ""

    if not content:
        content = hit.snippet or hit.title

    summary = FlowRunner.run(SummarizeSourceFlow(hit, content))
    return ResearchResult(title=hit.title, url=hit.url, summary=summary.summary.strip())


def auto_research(query: str, search: WebSearchClient) -> AutoResearchResponse:
    """
    Research a topic: search, summarize the top sources, synthesize
    Sources are processed one after another to stay within model rate limits
    """
    query = query.strip()
    hits = search.search(query + RESEARCH_QUERY_SUFFIX, RESEARCH_RESULT_LIMIT)
    if not hits:
        raise ValueError(f"No research sources found for: {query}")

    results = [_summarize_hit(search, hit) for hit in hits[:RESEARCH_RESULT_LIMIT]]

    synthesis = FlowRunner.run(SynthesizeResearchFlow(query, results))
    logger.info(f"Research on '{query[:60]}' produced {len(results)} sources")

    return AutoResearchResponse(
        results=results,
        overall_summary=synthesis.overall_summary.strip()
    )
