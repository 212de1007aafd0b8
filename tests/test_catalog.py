import json

import pytest

from brandaudit.services.analysis_store import AnalysisStore
from brandaudit.services.audit import AuditService, BrandNotFoundError
from brandaudit.services.catalog import (
    CatalogError,
    InMemoryGuidelineCatalog,
    JsonFileGuidelineCatalog,
)

from conftest import make_observation


class TestInMemoryCatalog:

    def test_create_assigns_ids(self, catalog):
        assert [g.id for g in catalog.list_all()] == [1, 2, 3]
        assert catalog.count() == 3

    def test_lookup_is_case_insensitive(self, catalog):
        assert catalog.find_by_brand_name("github").brand_name == "GitHub"
        assert catalog.find_by_brand_name("nope") is None
        assert catalog.exists("BUFFER")

    def test_company_name_defaults_to_brand_name(self):
        guideline = InMemoryGuidelineCatalog().create({"brandName": "Stripe"})
        assert guideline.company_name == "Stripe"

    def test_create_requires_brand_name(self):
        with pytest.raises(CatalogError):
            InMemoryGuidelineCatalog().create({"company_name": "Nameless"})

    def test_upsert_updates_existing(self, catalog):
        updated = catalog.upsert({"brand_name": "GitHub", "industry": "Developer Tools"})
        assert updated.id == 1
        assert updated.industry == "Developer Tools"
        assert updated.company_name == "GitHub, Inc."
        assert catalog.count() == 3

    def test_upsert_updates_voice_and_tone_alias(self):
        catalog = InMemoryGuidelineCatalog()
        catalog.upsert({"brandName": "Acme", "voiceAndTone": {"forbidden": ["cheap"]}})
        updated = catalog.upsert({"brandName": "Acme", "voiceAndTone": {"forbidden": ["synergy"]}})
        assert updated.tone == {"forbidden": ["synergy"]}
        assert catalog.find_by_brand_name("acme").tone == {"forbidden": ["synergy"]}

    def test_upsert_creates_new(self, catalog):
        created = catalog.upsert({"brand_name": "Stripe", "companyName": "Stripe, Inc."})
        assert created.id == 4
        assert created.company_name == "Stripe, Inc."

    def test_soft_delete(self, catalog):
        github = catalog.find_by_brand_name("GitHub")
        assert catalog.delete(github.id)
        assert catalog.find_by_brand_name("GitHub") is None
        assert catalog.find_by_id(github.id) is None
        assert not catalog.delete(github.id)
        assert [g.brand_name for g in catalog.list_all()] == ["Buffer", "Apple"]

    def test_search_company_and_industry(self, catalog):
        assert [g.brand_name for g in catalog.search("inc.")] == ["GitHub", "Buffer", "Apple"]
        assert [g.brand_name for g in catalog.search("social")] == ["Buffer"]

    def test_pagination(self, catalog):
        assert [g.brand_name for g in catalog.list_paginated(limit=1, offset=1)] == ["Buffer"]

    def test_reset(self, catalog):
        catalog.reset()
        assert catalog.list_all() == []
        assert catalog.create({"brand_name": "Fresh"}).id == 1


class TestJsonFileCatalog:

    def test_default_seed(self):
        catalog = JsonFileGuidelineCatalog()
        assert [g.brand_name for g in catalog.list_all()] == ["GitHub", "Buffer", "Apple"]

    def test_reset_restores_seed(self):
        catalog = JsonFileGuidelineCatalog()
        catalog.delete(catalog.find_by_brand_name("Apple").id)
        catalog.create({"brand_name": "Extra"})
        catalog.reset()
        assert [g.brand_name for g in catalog.list_all()] == ["GitHub", "Buffer", "Apple"]

    def test_custom_seed(self, tmp_path):
        seed = tmp_path / "seed.json"
        seed.write_text(json.dumps([{"brandName": "Acme", "voiceAndTone": {"forbidden": ["cheap"]}}]))
        guideline = JsonFileGuidelineCatalog(seed).find_by_brand_name("acme")
        assert guideline.tone == {"forbidden": ["cheap"]}

    def test_missing_seed(self, tmp_path):
        with pytest.raises(CatalogError):
            JsonFileGuidelineCatalog(tmp_path / "missing.json")

    def test_seed_must_be_a_list(self, tmp_path):
        seed = tmp_path / "seed.json"
        seed.write_text(json.dumps({"brand_name": "Acme"}))
        with pytest.raises(CatalogError):
            JsonFileGuidelineCatalog(seed)


class TestAuditService:

    def _observation(self):
        return make_observation(
            elements=[{"type": "h1", "text": "Build software", "styles": {"font-family": "SF Pro Text"}}],
            colors=["#24292e"],
            images=[{"src": "/logo.svg", "alt": "GitHub logo"}],
        )

    def test_detected_brand_is_audited_and_stored(self):
        store = AnalysisStore()
        service = AuditService(JsonFileGuidelineCatalog(), store)
        result = service.audit_website("https://github.com", self._observation())

        assert result.brand_name == "GitHub"
        assert result.detection.success
        assert result.report.score == 100
        record = store.get(result.analysis_id)
        assert record.brand_name == "GitHub"
        assert record.total_violations == 0
        assert record.elements_analyzed == 1
        assert record.to_dict()["report"] == result.report.to_dict()

    def test_explicit_brand_name(self):
        service = AuditService(JsonFileGuidelineCatalog(), AnalysisStore())
        result = service.audit_website("https://github.com", self._observation(), brand_name="apple")
        assert result.brand_name == "Apple"
        assert result.detection is None

    def test_unknown_brand_name(self):
        service = AuditService(JsonFileGuidelineCatalog(), AnalysisStore())
        with pytest.raises(BrandNotFoundError):
            service.audit_website("https://github.com", self._observation(), brand_name="Nope")

    def test_falls_back_to_top_suggestion(self):
        service = AuditService(JsonFileGuidelineCatalog(), AnalysisStore())
        result = service.audit_website("https://zzzz.org", self._observation())
        assert result.brand_name == "GitHub"
        assert result.detection.success is False

    def test_empty_catalog(self):
        service = AuditService(InMemoryGuidelineCatalog(), AnalysisStore())
        with pytest.raises(BrandNotFoundError):
            service.audit_website("https://github.com", self._observation())


class TestAnalysisStore:

    def test_list_recent_and_reset(self):
        store = AnalysisStore()
        for score in (10, 20, 30):
            store.create(
                guideline_id=1, brand_name="GitHub", website_url="https://github.com",
                score=score, total_violations=0, severity_breakdown={}, report={},
            )
        assert store.count() == 3
        assert len(store.list_recent(limit=2)) == 2
        store.reset()
        assert store.count() == 0
        assert store.get("missing") is None

    def _create(self, store, score=0):
        return store.create(
            guideline_id=1, brand_name="GitHub", website_url="https://github.com",
            score=score, total_violations=0, severity_breakdown={}, report={},
        )

    def test_oldest_record_evicted_when_full(self):
        store = AnalysisStore(max_records=3)
        first = self._create(store, 1)
        rest = [self._create(store, score) for score in (2, 3, 4, 5)]
        assert store.count() == 3
        assert store.get(first.id) is None
        assert store.get(rest[0].id) is None
        assert all(store.get(r.id) is not None for r in rest[1:])

    def test_default_capacity_from_settings(self):
        from brandaudit.core.config import settings
        store = AnalysisStore()
        assert store.max_records == settings.MAX_STORED_ANALYSES
        for _ in range(settings.MAX_STORED_ANALYSES + 5):
            self._create(store)
        assert store.count() == settings.MAX_STORED_ANALYSES

    def test_invalid_capacity(self):
        with pytest.raises(ValueError):
            AnalysisStore(max_records=0)

    def test_negative_limit_lists_nothing(self):
        store = AnalysisStore()
        self._create(store)
        assert store.list_recent(limit=-1) == []
