"""Content generation pipeline for nightsWriter."""

from src.pipeline.blog_pipeline import NO_EVENTS_MESSAGE, BlogGenerationPipeline

__all__ = [
    "BlogGenerationPipeline",
    "NO_EVENTS_MESSAGE",
]
