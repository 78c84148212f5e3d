"""Keyword scoring of guides against a free-text query."""

from __future__ import annotations

from dataclasses import dataclass, field

from .models import GuideMetadata

TITLE_PHRASE = 10
TITLE_TERM = 5
DESCRIPTION_PHRASE = 5
DESCRIPTION_TERM = 2
TAG_PHRASE = 3
TAG_TERM = 1
CATEGORY_PHRASE = 3


@dataclass
class SearchResult:
    metadata: GuideMetadata
    score: int
    matched_terms: list[str] = field(default_factory=list)


def split_terms(query: str) -> list[str]:
    """Lower-cased whitespace-separated terms, empty ones dropped."""
    return query.lower().split()


def score_guide(metadata: GuideMetadata, query: str) -> int:
    """Score one guide's metadata against ``query``.

    The full lower-cased query and each of its terms are matched as substrings
    of the lower-cased fields:

    ==========================  ============  ===========
    field                       full query    per term
    ==========================  ============  ===========
    title                       +10           +5
    description                 +5            +2
    each tag                    +3            +1
    category                    +3            -
    ==========================  ============  ===========
    """
    phrase = query.lower()
    terms = split_terms(query)

    title = metadata.title.lower()
    description = metadata.description.lower()

    score = 0
    if phrase in title:
        score += TITLE_PHRASE
    score += TITLE_TERM * sum(1 for term in terms if term in title)

    if phrase in description:
        score += DESCRIPTION_PHRASE
    score += DESCRIPTION_TERM * sum(1 for term in terms if term in description)

    for tag in metadata.tags:
        tag = tag.lower()
        if phrase in tag:
            score += TAG_PHRASE
        score += TAG_TERM * sum(1 for term in terms if term in tag)

    if phrase in metadata.category.lower():
        score += CATEGORY_PHRASE

    return score


def rank_guides(guides: list[GuideMetadata], query: str) -> list[SearchResult]:
    """Scored matches, best first. Zero scores are dropped; ties keep input order."""
    terms = split_terms(query)
    results = []
    for metadata in guides:
        score = score_guide(metadata, query)
        if score > 0:
            haystack = " ".join([metadata.title, metadata.description, *metadata.tags]).lower()
            results.append(SearchResult(metadata, score, [t for t in terms if t in haystack]))
    # sorted() is stable
    return sorted(results, key=lambda r: r.score, reverse=True)


def search_guides(guides: list[GuideMetadata], query: str) -> list[GuideMetadata]:
    """Ranked metadata for ``query``; a blank query returns ``guides`` unranked."""
    if not query.strip():
        return list(guides)
    return [result.metadata for result in rank_guides(guides, query)]
