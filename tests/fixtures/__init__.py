# Test fixtures
from .sample_documents import (
    SAMPLE_STORY_AML,
    SAMPLE_PLAIN_AML,
    SAMPLE_EMPTY_AML,
    SAMPLE_FREEFORM_AML,
    create_story_tree,
    create_source_node,
)

__all__ = [
    "SAMPLE_STORY_AML",
    "SAMPLE_PLAIN_AML",
    "SAMPLE_EMPTY_AML",
    "SAMPLE_FREEFORM_AML",
    "create_story_tree",
    "create_source_node",
]
