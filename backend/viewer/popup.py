"""
Popup listing the places behind a selected cluster marker.
"""
import html
import re
from typing import Dict, List, Sequence

from viewer.cluster import Feature


def slugify(text: str) -> str:
    """URL slug; keeps CJK characters, collapses everything else to dashes."""
    slug = re.sub(r"[^\w]+", "-", text.strip().lower(), flags=re.UNICODE)
    return slug.strip("-_") or "place"


def place_href(feature: Feature) -> str:
    """Link to the place page: /place/<slug>/<id>."""
    return f"/place/{slugify(feature.get('name') or '')}/{feature.get('id')}"


class Popup:
    """Renders a fixed list of features; holds no map state."""

    def __init__(self, features: Sequence[Feature]):
        self.features = list(features)

    def items(self) -> List[Dict[str, str]]:
        return [
            {
                "id": str(f.get("id")),
                "name": f.get("name") or "",
                "href": place_href(f),
            }
            for f in self.features
        ]

    def render(self) -> str:
        if not self.features:
            return ""
        rows = [
            f'<li><a href="{html.escape(item["href"])}">{html.escape(item["name"])}</a></li>'
            for item in self.items()
        ]
        return '<ul class="ol-popup-list">' + "".join(rows) + "</ul>"
