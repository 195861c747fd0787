from __future__ import annotations

from steamgrid.services.grid_pipeline import GridPipeline, RunSummary
from steamgrid.services.grid_publisher import GridPublisher
from steamgrid.services.image_acquirer import ImageAcquirer

__all__: list[str] = [
    "GridPipeline",
    "GridPublisher",
    "ImageAcquirer",
    "RunSummary",
]
