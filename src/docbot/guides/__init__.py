"""Guide generation, storage and search."""

from .generator import GuideGenerator, describe_action
from .models import Guide, GuideMetadata, GuideStep
from .search import rank_guides, score_guide, search_guides
from .store import GuideStore

__all__ = [
    "Guide",
    "GuideGenerator",
    "GuideMetadata",
    "GuideStep",
    "GuideStore",
    "describe_action",
    "rank_guides",
    "score_guide",
    "search_guides",
]
