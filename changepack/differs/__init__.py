"""Collection differs: mappings and sets."""

from changepack.differs.mapping import MapChangeset, diff_maps
from changepack.differs.sets import SetChangeset, diff_sets

__all__ = [
    "MapChangeset",
    "SetChangeset",
    "diff_maps",
    "diff_sets",
]
