import abc
import json
import logging
import threading
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from brandaudit.core.config import settings
from brandaudit.services.models import BrandGuideline

logger = logging.getLogger(__name__)

DEFAULT_SEED_PATH = Path(__file__).resolve().parent.parent / "data" / "seed_guidelines.json"


class CatalogError(RuntimeError): pass


class GuidelineCatalog(abc.ABC):
    """
    Abstract base class for brand guideline storage (memory, JSON seed, DB, ...).
    The engine only reads through list_all() and find_by_brand_name().
    """

    @abc.abstractmethod
    def list_all(self) -> List[BrandGuideline]:
        """
        All active guidelines, in a stable order.
        """
        pass

    @abc.abstractmethod
    def find_by_brand_name(self, brand_name: str) -> Optional[BrandGuideline]:
        """
        Case-insensitive lookup of an active guideline.
        """
        pass

    @abc.abstractmethod
    def find_by_id(self, guideline_id: int) -> Optional[BrandGuideline]:
        pass

    @abc.abstractmethod
    def create(self, data: Union[Dict[str, Any], BrandGuideline]) -> BrandGuideline:
        pass

    @abc.abstractmethod
    def update(self, guideline_id: int, data: Dict[str, Any]) -> Optional[BrandGuideline]:
        pass

    @abc.abstractmethod
    def delete(self, guideline_id: int) -> bool:
        """
        Soft delete. Returns False if nothing active had that id.
        """
        pass

    @abc.abstractmethod
    def reset(self) -> None:
        pass

    # ─── Derived queries ─────────────────────────────────────────────────────

    def exists(self, brand_name: str) -> bool:
        return self.find_by_brand_name(brand_name) is not None

    def count(self) -> int:
        return len(self.list_all())

    def list_paginated(self, limit: int = 10, offset: int = 0) -> List[BrandGuideline]:
        return self.list_all()[offset:offset + limit]

    def search(self, query: str) -> List[BrandGuideline]:
        """Match company name or industry (case-insensitive substring)."""
        q = query.lower()
        return [
            g for g in self.list_all()
            if q in (g.company_name or "").lower() or q in (g.industry or "").lower()
        ]

    def upsert(self, data: Dict[str, Any]) -> BrandGuideline:
        """Update the guideline with the same brand name, or create it."""
        brand_name = data.get("brand_name") or data.get("brandName") or ""
        existing = self.find_by_brand_name(brand_name)
        if existing:
            updated = self.update(existing.id, data)
            if updated is not None:
                return updated
        return self.create(data)


class InMemoryGuidelineCatalog(GuidelineCatalog):
    """
    Process-local catalog. Each instance owns its data, so tests and the app
    get independent stores with an explicit reset().
    """
    _UPDATABLE = ("company_name", "industry", "colors", "typography", "logo", "tone")

    def __init__(self):
        self._guidelines: Dict[int, BrandGuideline] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def list_all(self) -> List[BrandGuideline]:
        with self._lock:
            return [g for g in self._guidelines.values() if g.is_active]

    def find_by_brand_name(self, brand_name: str) -> Optional[BrandGuideline]:
        if not brand_name:
            return None
        target = brand_name.lower()
        for guideline in self.list_all():
            if guideline.brand_name and guideline.brand_name.lower() == target:
                return guideline
        return None

    def find_by_id(self, guideline_id: int) -> Optional[BrandGuideline]:
        with self._lock:
            guideline = self._guidelines.get(guideline_id)
        return guideline if guideline and guideline.is_active else None

    def create(self, data: Union[Dict[str, Any], BrandGuideline]) -> BrandGuideline:
        guideline = data if isinstance(data, BrandGuideline) else BrandGuideline.from_dict(data)
        if not guideline.brand_name:
            raise CatalogError("Brand name is required")

        with self._lock:
            guideline = replace(guideline, id=self._next_id, is_active=True)
            self._guidelines[guideline.id] = guideline
            self._next_id += 1

        logger.info(f"Created guideline: {guideline.brand_name} (ID: {guideline.id})")
        return guideline

    def update(self, guideline_id: int, data: Dict[str, Any]) -> Optional[BrandGuideline]:
        incoming = BrandGuideline.from_dict({"brand_name": "", **data})
        with self._lock:
            current = self._guidelines.get(guideline_id)
            if not current or not current.is_active:
                return None
            changes = {
                key: getattr(incoming, key)
                for key in self._UPDATABLE
                if getattr(incoming, key) is not None and any(alias in data for alias in _aliases(key))
            }
            updated = replace(current, updated_at=datetime.now(), **changes)
            self._guidelines[guideline_id] = updated
        return updated

    def delete(self, guideline_id: int) -> bool:
        with self._lock:
            current = self._guidelines.get(guideline_id)
            if not current or not current.is_active:
                return False
            self._guidelines[guideline_id] = replace(current, is_active=False, updated_at=datetime.now())
        return True

    def reset(self) -> None:
        with self._lock:
            self._guidelines.clear()
            self._next_id = 1


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


# Payload keys BrandGuideline.from_dict accepts beyond snake_case and camelCase
_EXTRA_ALIASES = {"tone": ("voiceAndTone",)}


def _aliases(name: str) -> tuple:
    return (name, _camel(name), *_EXTRA_ALIASES.get(name, ()))


class JsonFileGuidelineCatalog(InMemoryGuidelineCatalog):
    """
    In-memory catalog seeded from a JSON file (a list of guideline objects).
    reset() restores the seed.
    """
    def __init__(self, seed_path: Union[str, Path] = DEFAULT_SEED_PATH):
        super().__init__()
        self.seed_path = Path(seed_path)
        self._load_seed()

    def _load_seed(self) -> None:
        try:
            with open(self.seed_path, "r", encoding="utf-8") as f:
                entries = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogError(f"Failed to load guideline seed {self.seed_path}: {e}") from e

        if not isinstance(entries, list):
            raise CatalogError(f"Guideline seed {self.seed_path} must contain a JSON list")

        for entry in entries:
            self.create(entry)
        logger.info(f"Loaded {len(entries)} guidelines from {self.seed_path}")

    def reset(self) -> None:
        super().reset()
        self._load_seed()


# ─── Factory ─────────────────────────────────────────────────────────────────

def get_guideline_catalog() -> GuidelineCatalog:
    if settings.CATALOG_TYPE.lower() == "json":
        return JsonFileGuidelineCatalog(settings.CATALOG_SEED_PATH or DEFAULT_SEED_PATH)
    return InMemoryGuidelineCatalog()
