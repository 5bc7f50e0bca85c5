"""
World state: spatial grid, sector view, scan memory and the Galaxy aggregate.
"""

from .grid import Grid, GALAXY_GRID, SECTOR_GRID, calculate_distance
from .sector_view import SectorView, populate_sector_view
from .scan_memory import ScanMemory
from .generation import GeneratedGalaxy, generate_galaxy
from .galaxy import Galaxy


__all__ = [
    "Grid",
    "GALAXY_GRID",
    "SECTOR_GRID",
    "calculate_distance",
    "SectorView",
    "populate_sector_view",
    "ScanMemory",
    "GeneratedGalaxy",
    "generate_galaxy",
    "Galaxy",
]
