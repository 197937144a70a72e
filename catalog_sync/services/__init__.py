"""
Application services
"""

from .scrape_pipeline import ScrapePipeline, PipelineResult

__all__ = ["ScrapePipeline", "PipelineResult"]
