from __future__ import annotations

import os

# Must be set before brandaudit.core.config is imported anywhere
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("CATALOG_TYPE", "json")

import pytest

from brandaudit.services.catalog import InMemoryGuidelineCatalog
from brandaudit.services.models import BrandGuideline, WebsiteObservation


def make_guideline(**overrides) -> BrandGuideline:
    data = {
        "id": 1,
        "brand_name": "GitHub",
        "company_name": "GitHub, Inc.",
        "industry": "Software Development",
        "colors": {
            "primary": {"brand": {"hex": "#0366D6"}},
            "semantic": {"success": {"hex": "#28a745"}, "broken": {"name": "no hex here"}},
            "neutral": {"white": {"hex": "#fff"}},
            "forbidden": ["#FF0000"],
        },
        "typography": {"fonts": {"primary": "SF Pro Text", "fallback": "-apple-system"}},
        "logo": {
            "variants": {"mark": {"description": "Octocat mark"}, "wordmark": "GitHub wordmark"},
            "rules": ["Keep 8px clear space"],
        },
        "tone": {"style": "concise", "forbidden": ["cheap"]},
    }
    data.update(overrides)
    return BrandGuideline.from_dict(data)


def make_observation(elements=None, colors=None, images=None) -> WebsiteObservation:
    return WebsiteObservation.from_dict({
        "elements": elements or [],
        "colors": colors or [],
        "images": images or [],
    })


@pytest.fixture
def guideline() -> BrandGuideline:
    return make_guideline()


@pytest.fixture
def catalog() -> InMemoryGuidelineCatalog:
    store = InMemoryGuidelineCatalog()
    store.create({"brand_name": "GitHub", "company_name": "GitHub, Inc.", "industry": "Software"})
    store.create({"brand_name": "Buffer", "company_name": "Buffer Inc.", "industry": "Social Media"})
    store.create({"brand_name": "Apple", "company_name": "Apple Inc.", "industry": "Consumer Electronics"})
    return store
