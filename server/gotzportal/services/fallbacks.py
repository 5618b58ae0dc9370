"""Static content served when no database is configured or a read fails.

Every list starts empty so a fresh deployment renders empty sections
instead of errors. Items are already in the public response shape.
"""

import copy
from dataclasses import dataclass, field
from typing import Any


@dataclass
class FallbackData:
    hero_slides: list[dict[str, Any]] = field(default_factory=list)
    feature_cards: list[dict[str, Any]] = field(default_factory=list)
    about_stats: list[dict[str, Any]] = field(default_factory=list)
    about_highlights: list[dict[str, Any]] = field(default_factory=list)
    contact_channels: list[dict[str, Any]] = field(default_factory=list)
    contact_quick_facts: list[str] = field(default_factory=list)
    itineraries: list[dict[str, Any]] = field(default_factory=list)
    destinations: list[dict[str, Any]] = field(default_factory=list)
    lodges: list[dict[str, Any]] = field(default_factory=list)
    tour_packages: list[dict[str, Any]] = field(default_factory=list)

    def get(self, resource: str) -> list[Any]:
        """Return a deep copy of one fallback list so callers cannot mutate the source."""
        return copy.deepcopy(getattr(self, resource))

    def find_by_slug(self, resource: str, slug: str) -> dict[str, Any] | None:
        for item in self.get(resource):
            if item.get("slug") == slug:
                return item
        return None
