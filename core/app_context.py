import logging
from dataclasses import dataclass
from typing import List, Optional

from core.applications.repository import InMemoryApplicationRepository
from core.applications.service import ApplicationService
from core.cache.job_cache import JobCache, build_job_cache
from core.config_loader import AppConfig, LlmConfig
from core.llm.openai_service import OpenAIService
from core.resume.store import InMemoryResumeStore, ResumeStore
from core.scorer.service import ScoringService
from core.search.service import JobSearchService
from core.sources.base import JobSource
from core.sources.fallback import FallbackJobSource
from core.sources.mock import MockJobSource
from core.sources.remotive import RemotiveJobSource

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Application context container that holds all wired dependencies.

    Providers and stores are created once here and passed explicitly to the
    services that use them; nothing downstream reaches for globals.
    """
    config: AppConfig
    cache: JobCache
    job_source: JobSource
    resumes: ResumeStore
    scoring_service: ScoringService
    search_service: JobSearchService
    application_service: ApplicationService
    ai_service: Optional[OpenAIService] = None

    @classmethod
    def build(cls, config: AppConfig) -> "AppContext":
        """Build an AppContext from config.

        Args:
            config: Loaded application configuration

        Returns:
            Fully wired AppContext instance
        """
        ai_service = cls._build_ai_service(config.llm)

        scoring_service = ScoringService(
            similarity_provider=ai_service,
            explanation_provider=ai_service,
            config=config.scoring
        )

        cache = build_job_cache(config.cache)
        job_source = cls._build_job_source(config)
        resumes = InMemoryResumeStore()

        search_service = JobSearchService(
            cache=cache,
            source=job_source,
            scoring=scoring_service,
            resumes=resumes,
            best_matches_limit=config.search.best_matches_limit
        )

        application_service = ApplicationService(
            repo=InMemoryApplicationRepository(),
            strict_transitions=config.applications.strict_transitions
        )

        return cls(
            config=config,
            cache=cache,
            job_source=job_source,
            resumes=resumes,
            scoring_service=scoring_service,
            search_service=search_service,
            application_service=application_service,
            ai_service=ai_service
        )

    @staticmethod
    def _build_ai_service(llm_config: LlmConfig) -> Optional[OpenAIService]:
        """Build OpenAI service, or None when no API key is configured."""
        if not llm_config.is_configured:
            logger.info("OpenAI API key not configured, using keyword scoring")
            return None

        model_config = {
            'embedding_model': llm_config.embedding_model,
            'embedding_dimensions': llm_config.embedding_dimensions,
            'explanation_model': llm_config.explanation_model,
            'explanation_temperature': llm_config.explanation_temperature,
        }

        return OpenAIService(
            api_key=llm_config.api_key,
            base_url=llm_config.base_url,
            model_config=model_config,
            timeout_seconds=llm_config.request_timeout_seconds
        )

    @staticmethod
    def _build_job_source(config: AppConfig) -> JobSource:
        """Remotive first, then static postings if the fallback is enabled."""
        sources: List[JobSource] = [
            RemotiveJobSource(
                base_url=config.sources.remotive_url,
                request_timeout_seconds=config.sources.request_timeout_seconds
            )
        ]
        if config.sources.use_mock_fallback:
            sources.append(MockJobSource())
        return FallbackJobSource(sources)
