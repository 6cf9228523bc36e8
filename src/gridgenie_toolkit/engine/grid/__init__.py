"""Grid occupancy and grid <-> page projection."""

from .geometry import GridGeometry
from .occupancy import GridOccupancy

__all__ = ["GridGeometry", "GridOccupancy"]
