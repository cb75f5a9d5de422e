"""
LLM Provider Interfaces - capabilities consumed by the scoring engine.

Both capabilities are optional. The scoring engine is handed whichever
implementations the application was configured with and never looks them up
on its own.
"""
from abc import ABC, abstractmethod
from typing import List


class SimilarityProvider(ABC):
    """Produces embedding vectors for semantic scoring."""

    @abstractmethod
    def embed(self, text: str) -> List[float]:
        """
        Generate a vector embedding for the given text.

        Raises:
            ProviderFailureException: if the embedding could not be produced
        """
        pass


class ExplanationProvider(ABC):
    """Writes a short natural-language rationale for a match score."""

    @abstractmethod
    def explain(self, title: str, description: str, resume_text: str, score: int) -> str:
        """
        Explain why a job received the given score for a résumé.

        Raises:
            ProviderFailureException: if no explanation could be produced
        """
        pass
