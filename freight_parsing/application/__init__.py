"""
Application слой: диспетчер, пайплайн, фабрика компонентов.
"""

from .dispatcher import VendorDispatcher
from .extraction_pipeline import ExtractionPipeline, PipelineResult
from .factory import ExtractionComponentFactory

__all__ = [
    "VendorDispatcher",
    "ExtractionPipeline",
    "PipelineResult",
    "ExtractionComponentFactory",
]
