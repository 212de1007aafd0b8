from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    PROJECT_NAME: str = "Brand Audit API"
    LOG_LEVEL: str = "INFO"
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_DEFAULT: str = "60/minute"
    RATE_LIMIT_STORAGE_URI: str = "memory://"  # e.g. redis://localhost:6379/0

    # ⚠ SECURITY WARNING: These defaults are for local development ONLY.
    # In production, you MUST override CORS_ORIGINS via environment variable to restrict access.
    CORS_ORIGINS: str = "http://localhost:5173,http://localhost:3000,http://localhost:8080"

    # ─── Brand Matching ──────────────────────────────────────────────────
    MATCH_CONFIDENCE_THRESHOLD: float = 0.1   # fallback-only score must NOT pass
    FUZZY_MATCH_THRESHOLD: float = 0.3
    MAX_ALTERNATIVES: int = 2
    MAX_SUGGESTIONS: int = 3
    MAX_BRAND_SUGGESTIONS: int = 10

    # ─── Guideline Catalog ───────────────────────────────────────────────
    CATALOG_TYPE: str = "json"  # "memory" (empty) or "json" (seeded from CATALOG_SEED_PATH)
    CATALOG_SEED_PATH: str = ""  # Empty -> bundled brandaudit/data/seed_guidelines.json

    # ─── Analysis Store ──────────────────────────────────────────────────
    MAX_STORED_ANALYSES: int = 1000  # Oldest results are evicted past this

    class Config:
        env_file = ".env"

settings = Settings()
