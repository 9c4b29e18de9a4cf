"""Wiki access, extraction and page cache bookkeeping."""

from .cache import WikiGameCache
from .extract import ExtractionTallies, GameExtractor
from .wiki_client import CategoryPage, TemplateNode, WikiClient, WikiPage, parse_templates

__all__ = [
    "WikiGameCache",
    "ExtractionTallies",
    "GameExtractor",
    "CategoryPage",
    "TemplateNode",
    "WikiClient",
    "WikiPage",
    "parse_templates",
]
