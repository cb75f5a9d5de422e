import yaml
import os
from typing import Optional, Dict, Any, Literal
from pydantic import BaseModel, Field

# Values shipped in sample .env files; treated as "no key configured".
PLACEHOLDER_API_KEYS = {"", "your_openai_api_key"}


class LlmConfig(BaseModel):
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    embedding_model: str = "text-embedding-3-small"
    embedding_dimensions: Optional[int] = None
    explanation_model: str = "gpt-4o-mini"
    explanation_temperature: float = 0.3
    request_timeout_seconds: float = 20.0

    @property
    def is_configured(self) -> bool:
        return (self.api_key or "").strip() not in PLACEHOLDER_API_KEYS


class CacheConfig(BaseModel):
    backend: Literal["memory", "redis"] = "memory"
    ttl_seconds: int = 15 * 60
    redis_url: str = "redis://localhost:6379/0"
    redis_password: Optional[str] = None


class ScoringConfig(BaseModel):
    """
    Configuration for the ScoringService.

    Truncation limits bound the amount of text sent to the embedding provider.
    """
    resume_max_chars: int = 8000
    job_max_chars: int = 4000
    notable_threshold: int = 50  # explanations requested above this score
    max_workers: int = 8
    provider_timeout_seconds: float = 30.0
    lexical_noise: bool = True


class ApplicationsConfig(BaseModel):
    # False keeps the permissive behaviour: any status may follow any status
    strict_transitions: bool = False


class SourcesConfig(BaseModel):
    remotive_url: str = "https://remotive.com/api/remote-jobs"
    request_timeout_seconds: int = 15
    use_mock_fallback: bool = True


class WebConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8080


class SearchConfig(BaseModel):
    default_page_size: int = 20
    best_matches_limit: int = 8


class AppConfig(BaseModel):
    llm: LlmConfig = Field(default_factory=LlmConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    applications: ApplicationsConfig = Field(default_factory=ApplicationsConfig)
    sources: SourcesConfig = Field(default_factory=SourcesConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    web: WebConfig = Field(default_factory=WebConfig)


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    """Apply environment variable overrides on top of the YAML data."""
    env_api_key = os.environ.get("OPENAI_API_KEY")
    if env_api_key:
        data.setdefault('llm', {})['api_key'] = env_api_key

    env_base_url = os.environ.get("OPENAI_BASE_URL")
    if env_base_url:
        data.setdefault('llm', {})['base_url'] = env_base_url

    env_redis_url = os.environ.get("REDIS_URL")
    if env_redis_url:
        data.setdefault('cache', {})['redis_url'] = env_redis_url

    if 'WEB_HOST' in os.environ:
        data.setdefault('web', {})['host'] = os.environ['WEB_HOST']

    if 'WEB_PORT' in os.environ:
        data.setdefault('web', {})['port'] = int(os.environ['WEB_PORT'])

    return data


def load_config(config_path: str = "config.yaml") -> AppConfig:
    # If not found at relative path (e.g. running from a subdirectory), try the project root
    if not os.path.exists(config_path):
        base_dir = os.path.dirname(os.path.abspath(__file__))
        config_path = os.path.join(base_dir, "..", "config.yaml")

    data: Dict[str, Any] = {}
    if os.path.exists(config_path):
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}

    data = _apply_env_overrides(data)

    return AppConfig(**data)
