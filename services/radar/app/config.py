from pydantic import BaseModel
import os

class Settings(BaseModel):
    upstream_kind: str = os.getenv("UPSTREAM_KIND", "webhook")
    upstream_url: str = os.getenv("UPSTREAM_URL", "http://n8n:5678/webhook/news")
    proxy_upstream_url: str = os.getenv("PROXY_UPSTREAM_URL", "http://n8n:5678/webhook/news")
    upstream_timeout: float = float(os.getenv("UPSTREAM_TIMEOUT", "10"))
    upstream_limit: int = int(os.getenv("UPSTREAM_LIMIT", "10"))
    vector_query: str = os.getenv("VECTOR_QUERY", "latest AI and energy technology news")
    user_agent: str = os.getenv("USER_AGENT", "TechRadar-Server/1.0")
    cache_ttl: float = float(os.getenv("CACHE_TTL", "300"))
    # shorter window after a fallback so the next call retries upstream sooner
    fallback_ttl: float = float(os.getenv("FALLBACK_TTL", "30"))
    serve_fallback_first: bool = os.getenv("SERVE_FALLBACK_FIRST", "0") == "1"
    refresh_every_sec: int = int(os.getenv("REFRESH_EVERY_SEC", "120"))
    search_limit: int = int(os.getenv("SEARCH_LIMIT", "5"))
    search_fallback_count: int = int(os.getenv("SEARCH_FALLBACK_COUNT", "3"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
