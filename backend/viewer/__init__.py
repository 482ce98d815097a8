from .map_display import MapDisplay, MapState, View
from .popup import Popup
from .style import StyleCache

__all__ = ["MapDisplay", "MapState", "View", "Popup", "StyleCache"]
