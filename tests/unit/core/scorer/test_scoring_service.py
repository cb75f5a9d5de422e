"""
Tests for ScoringService strategy selection and fallbacks.
"""
import time

import pytest

from core.config_loader import ScoringConfig
from core.models import JobPosting
from core.scorer.badges import MatchBadge, NO_RESUME_EXPLANATION, template_explanation
from core.scorer.lexical import no_noise
from core.scorer.models import STRATEGY_LEXICAL, STRATEGY_NONE, STRATEGY_SEMANTIC
from core.scorer.service import ScoringService
from tests.mocks.providers import MockExplanationProvider, MockSimilarityProvider

RESUME = "RESUME seasoned React and Python engineer"


def make_job(job_id, title, skills=()):
    return JobPosting(id=job_id, title=title, company="Acme", skills=tuple(skills))


@pytest.fixture
def jobs():
    return [
        make_job("a", "Alpha React Developer", ["React"]),
        make_job("b", "Bravo Accountant"),
        make_job("c", "Charlie Python Engineer", ["Python"]),
        make_job("d", "Delta Analyst"),
    ]


@pytest.fixture
def vectors():
    return {
        "RESUME": [1.0, 0.0],
        "Alpha": [1.0, 0.0],     # 100
        "Bravo": [-1.0, 0.0],    # negative similarity, clamped to 0
        "Charlie": [1.0, 1.0],   # 71
        "Delta": [1.0, 2.0],     # 45
    }


def semantic_service(similarity, explainer=None, **config):
    return ScoringService(
        similarity_provider=similarity,
        explanation_provider=explainer,
        config=ScoringConfig(**config),
        noise=no_noise
    )


class TestStrategySelection:

    def test_lexical_without_provider(self):
        assert ScoringService(noise=no_noise).strategy_name == STRATEGY_LEXICAL

    def test_semantic_with_provider(self, vectors):
        service = semantic_service(MockSimilarityProvider(vectors))

        assert service.strategy_name == STRATEGY_SEMANTIC


class TestNoResume:

    @pytest.mark.parametrize("resume", [None, "", "   \n"])
    def test_every_job_gets_notice(self, jobs, vectors, resume):
        similarity = MockSimilarityProvider(vectors)
        service = semantic_service(similarity)

        scored = service.score_all(jobs, resume)

        assert [s.id for s in scored] == ["a", "b", "c", "d"]
        for s in scored:
            assert s.match_score == 0
            assert s.match_badge == MatchBadge.GRAY
            assert s.match_explanation == NO_RESUME_EXPLANATION
            assert s.strategy == STRATEGY_NONE
        assert similarity.calls == []


class TestSemanticScoring:

    def test_01_scores_follow_cosine_similarity(self, jobs, vectors):
        scored = semantic_service(MockSimilarityProvider(vectors)).score_all(jobs, RESUME)

        assert [s.id for s in scored] == ["a", "b", "c", "d"]
        assert [s.match_score for s in scored] == [100, 0, 71, 45]
        assert [s.match_badge for s in scored] == [
            MatchBadge.GREEN, MatchBadge.GRAY, MatchBadge.GREEN, MatchBadge.YELLOW
        ]
        assert all(s.strategy == STRATEGY_SEMANTIC for s in scored)

    def test_02_explanations_only_for_notable_scores(self, jobs, vectors):
        explainer = MockExplanationProvider()
        service = semantic_service(MockSimilarityProvider(vectors), explainer)

        scored = service.score_all(jobs, RESUME)

        assert scored[0].match_explanation == "LLM: Alpha React Developer (100)"
        assert scored[2].match_explanation == "LLM: Charlie Python Engineer (71)"
        assert scored[3].match_explanation == template_explanation(45)
        assert sorted(call[1] for call in explainer.calls) == [71, 100]

    def test_03_explanation_failure_uses_template(self, jobs, vectors):
        service = semantic_service(MockSimilarityProvider(vectors), MockExplanationProvider(fail=True))

        scored = service.score_all(jobs, RESUME)

        assert scored[0].match_score == 100
        assert scored[0].match_explanation == template_explanation(100)

    def test_04_empty_explanation_uses_template(self, jobs, vectors):
        service = semantic_service(MockSimilarityProvider(vectors), MockExplanationProvider(empty=True))

        scored = service.score_all(jobs, RESUME)

        assert scored[2].match_explanation == template_explanation(71)

    def test_05_failed_job_embedding_falls_back_per_job(self, jobs, vectors):
        similarity = MockSimilarityProvider(vectors, fail_on={"Charlie"})

        scored = semantic_service(similarity).score_all(jobs, RESUME)

        assert scored[2].strategy == STRATEGY_LEXICAL
        # "charlie" no, "python" twice, "engineer" yes -> 3 of 4 keywords
        assert scored[2].match_score == 75
        assert [scored[i].strategy for i in (0, 1, 3)] == [STRATEGY_SEMANTIC] * 3

    def test_06_dimension_mismatch_falls_back_per_job(self, jobs, vectors):
        vectors["Delta"] = [1.0, 0.0, 0.0]

        scored = semantic_service(MockSimilarityProvider(vectors)).score_all(jobs, RESUME)

        assert scored[3].strategy == STRATEGY_LEXICAL
        assert scored[0].strategy == STRATEGY_SEMANTIC

    def test_07_resume_embedding_failure_scores_whole_batch_lexically(self, jobs, vectors):
        similarity = MockSimilarityProvider(vectors, fail_on={"RESUME"})

        scored = semantic_service(similarity).score_all(jobs, RESUME)

        assert all(s.strategy == STRATEGY_LEXICAL for s in scored)
        assert len(similarity.calls) == 1

    def test_08_slow_provider_times_out_to_fallback(self, jobs, vectors):
        similarity = MockSimilarityProvider(vectors, slow_on={"Bravo"}, delay_seconds=2.0)
        service = semantic_service(similarity, provider_timeout_seconds=0.3, max_workers=4)

        started = time.monotonic()
        scored = service.score_all(jobs, RESUME)
        elapsed = time.monotonic() - started

        assert elapsed < 1.5
        assert scored[1].strategy == STRATEGY_LEXICAL
        assert scored[0].strategy == STRATEGY_SEMANTIC

    def test_09_resume_and_jobs_truncated(self, vectors):
        similarity = MockSimilarityProvider(vectors, default=[0.5, 0.5])
        service = semantic_service(similarity, resume_max_chars=10, job_max_chars=12)
        job = JobPosting(id="x", title="Alpha", company="Acme", description="z" * 100)

        service.score_all([job], RESUME + " " + "y" * 100)

        assert len(similarity.calls[0]) == 10
        assert len(similarity.calls[1]) == 12

    def test_10_score_one(self, jobs, vectors):
        service = semantic_service(MockSimilarityProvider(vectors))

        scored = service.score_one(jobs[2], RESUME)

        assert scored.id == "c"
        assert scored.match_score == 71

    def test_11_empty_job_list(self, vectors):
        similarity = MockSimilarityProvider(vectors)

        assert semantic_service(similarity).score_all([], RESUME) == []
        assert similarity.calls == []


class TestLexicalService:

    def test_lexical_scores_in_input_order(self, jobs):
        service = ScoringService(noise=no_noise)

        scored = service.score_all(jobs, RESUME)

        assert [s.id for s in scored] == ["a", "b", "c", "d"]
        assert all(s.strategy == STRATEGY_LEXICAL for s in scored)
        assert scored[1].match_score == 0

    def test_noise_from_config(self, jobs):
        quiet = ScoringService(config=ScoringConfig(lexical_noise=False))
        noisy = ScoringService(config=ScoringConfig(lexical_noise=True))

        assert [s.match_score for s in quiet.score_all(jobs, RESUME)] == \
            [s.match_score for s in ScoringService(noise=no_noise).score_all(jobs, RESUME)]
        assert noisy.score_all(jobs, RESUME) == noisy.score_all(jobs, RESUME)
