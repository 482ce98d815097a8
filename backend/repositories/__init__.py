from .places import PlacesRepository
from .linkages import LinkagesRepository
from . import models

__all__ = ["PlacesRepository", "LinkagesRepository", "models"]
