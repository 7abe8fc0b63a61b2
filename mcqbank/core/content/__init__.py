"""Question content loading."""

from mcqbank.core.content.loader import ContentLoader, load_catalog, load_topic_candidates

__all__ = ["ContentLoader", "load_catalog", "load_topic_candidates"]
