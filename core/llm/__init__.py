"""LLM Module - LLM services and interfaces."""
from core.llm.interfaces import SimilarityProvider, ExplanationProvider
from core.llm.openai_service import OpenAIService

__all__ = ['SimilarityProvider', 'ExplanationProvider', 'OpenAIService']
