"""SEO and GEO (generative engine optimization) heuristics.

Scores start at 50 and gain 10 points per satisfied rule, so each score ends
between 50 and 100. Suggestions list the rules a page misses.
"""

import logging
import re
from typing import List

from bs4 import BeautifulSoup, Comment, Doctype

from src.models.seo_models import SEOReport

logger = logging.getLogger(__name__)

BASE_SCORE = 50
RULE_POINTS = 10

MIN_META_DESCRIPTION = 80
SEO_MIN_WORDS = 300
GEO_MIN_WORDS = 500

AI_FRIENDLY_META = re.compile(r"AI|machine learning|FAQ|guide|how to", re.IGNORECASE)
AI_KEYWORD_META = re.compile(r"AI|FAQ|how to|guide", re.IGNORECASE)
QUESTION_TITLE = re.compile(r"\b(what|how|why|guide|tips)\b", re.IGNORECASE)
QUESTION_TITLE_SUGGEST = re.compile(r"\bhow|why|what\b", re.IGNORECASE)
QUESTION_BODY = re.compile(r"\b(who is|how does|what is)\b", re.IGNORECASE)


def _extract_body_text(soup: BeautifulSoup) -> str:
    # Every text node under <body>, script and style included, joined without
    # separators. Comments are not text.
    body = soup.body or soup
    text = "".join(
        node
        for node in body.find_all(string=True)
        if not isinstance(node, (Comment, Doctype))
    )
    return re.sub(r"\s+", " ", text).strip()


def _has_faq_schema(soup: BeautifulSoup) -> bool:
    scripts = soup.find_all("script", attrs={"type": "application/ld+json"})
    return any("FAQPage" in (script.string or "") for script in scripts)


def score_page(url: str, html: str) -> SEOReport:
    """Score a page's HTML against the SEO and GEO rules.

    Args:
        url: Page URL
        html: Raw HTML

    Returns:
        SEOReport with extracted fields, scores and suggestions
    """
    soup = BeautifulSoup(html or "", "html.parser")

    title_tag = soup.find("title")
    title = title_tag.get_text() if title_tag else ""

    meta_tag = soup.find("meta", attrs={"name": "description"})
    meta_desc = (meta_tag.get("content") or "") if meta_tag else ""

    h1_count = len(soup.find_all("h1"))
    has_faq = _has_faq_schema(soup)
    body_text = _extract_body_text(soup)
    word_count = len(body_text.split(" ")) if body_text else 0

    seo_rules = [
        bool(title),
        len(meta_desc) >= MIN_META_DESCRIPTION,
        h1_count > 0,
        word_count > SEO_MIN_WORDS,
        has_faq,
    ]
    geo_rules = [
        bool(AI_FRIENDLY_META.search(meta_desc)),
        has_faq,
        bool(QUESTION_TITLE.search(title)),
        bool(QUESTION_BODY.search(body_text)),
        word_count > GEO_MIN_WORDS,
    ]

    seo_suggestions: List[str] = []
    if not title:
        seo_suggestions.append("Add a page title.")
    if len(meta_desc) < MIN_META_DESCRIPTION:
        seo_suggestions.append("Use a meta description with 80–160 characters.")
    if h1_count == 0:
        seo_suggestions.append("Add at least one <h1> tag.")
    if word_count < SEO_MIN_WORDS:
        seo_suggestions.append("Add more body content.")

    geo_suggestions: List[str] = []
    if not has_faq:
        geo_suggestions.append("Add FAQ schema using JSON-LD for AI visibility.")
    if not AI_KEYWORD_META.search(meta_desc):
        geo_suggestions.append("Use AI-friendly keywords in meta description.")
    if not QUESTION_TITLE_SUGGEST.search(title):
        geo_suggestions.append("Use question-style titles to attract AI and search bots.")
    if word_count < GEO_MIN_WORDS:
        geo_suggestions.append("Expand your content to improve AI understanding.")

    report = SEOReport(
        url=url,
        title=title,
        meta_description=meta_desc,
        h1_count=h1_count,
        word_count=word_count,
        has_faq_schema=has_faq,
        seo_score=BASE_SCORE + RULE_POINTS * sum(seo_rules),
        geo_score=BASE_SCORE + RULE_POINTS * sum(geo_rules),
        seo_suggestions=seo_suggestions,
        geo_suggestions=geo_suggestions,
    )
    logger.debug(
        f"Scored {url}: SEO={report.seo_score}, GEO={report.geo_score}, "
        f"words={word_count}"
    )
    return report
