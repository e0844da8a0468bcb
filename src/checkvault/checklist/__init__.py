"""Checklist pipeline: tag blocks, extraction, filtering and grouping.

Example
-------
>>> from checkvault.checklist import ChecklistExtractor, FilterPipeline, group_todos
>>> pipeline = FilterPipeline(checklist_filter, ChecklistExtractor())
>>> groups = group_todos(pipeline.run(documents), "page")
"""

from .blocks import TagBlock, TagBlockLocator
from .extractor import ChecklistExtractor, Document, tag_matches
from .filters import FilterPipeline, TagFilter
from .grouping import GROUPING_MODES, group_todos, resolve_group_by, sort_in_place

__all__ = [
    "ChecklistExtractor",
    "Document",
    "FilterPipeline",
    "GROUPING_MODES",
    "TagBlock",
    "TagBlockLocator",
    "TagFilter",
    "group_todos",
    "resolve_group_by",
    "sort_in_place",
    "tag_matches",
]
