# services/analyzer.py
import logging
import os
from typing import Callable, Dict, List, Optional, Protocol, Sequence

from schemas import ConversationMessage, ScreenshotAnalysisResult
from services import openai_review, replicate_client
from services.heuristic import build_fallback_result
from services.utils import parse_model_response, salvage_messages

logger = logging.getLogger(__name__)

REVIEW_PROVIDER = os.getenv("REVIEW_PROVIDER", "openai").lower()


class Analyzer(Protocol):
    def analyze(self, image_data_url: str, filename: Optional[str] = None) -> ScreenshotAnalysisResult:
        ...


class ModelResponseError(ValueError):
    """The model answered, but not with a usable analysis."""

    def __init__(self, message: str, messages: Sequence[ConversationMessage] = ()):
        super().__init__(message)
        self.messages = list(messages)


def _provider_registry() -> Dict[str, Callable[[str], dict]]:
    return {
        "openai": openai_review.evaluate_screenshot,
        "replicate": replicate_client.evaluate_screenshot,
    }


class RemoteModelAnalyzer:
    def __init__(self, provider: str = REVIEW_PROVIDER, evaluate: Optional[Callable[[str], dict]] = None):
        self.provider = provider
        self._evaluate = evaluate

    def _evaluator(self) -> Callable[[str], dict]:
        if self._evaluate is not None:
            return self._evaluate
        registry = _provider_registry()
        if self.provider not in registry:
            raise RuntimeError(f"Unsupported REVIEW_PROVIDER: {self.provider}")
        return registry[self.provider]

    def analyze(self, image_data_url: str, filename: Optional[str] = None) -> ScreenshotAnalysisResult:
        payload = self._evaluator()(image_data_url)
        result = parse_model_response(payload)
        if result is None:
            raise ModelResponseError(f"{self.provider} returned an unparseable analysis", salvage_messages(payload))
        return result


class HeuristicAnalyzer:
    def __init__(self, conversation: Optional[Sequence[ConversationMessage]] = None):
        self.conversation = list(conversation) if conversation is not None else None

    def analyze(self, image_data_url: str, filename: Optional[str] = None) -> ScreenshotAnalysisResult:
        return build_fallback_result(self.conversation, filename)


def analyze_screenshot(
    image_data_url: str,
    filename: Optional[str] = None,
    primary: Optional[Analyzer] = None,
    fallback: Optional[Analyzer] = None,
) -> ScreenshotAnalysisResult:
    """
    Try the remote model first; on any failure answer with the keyword scorer.
    Messages the model did extract are scored instead of the demo conversation.
    """
    primary = primary or RemoteModelAnalyzer()
    try:
        return primary.analyze(image_data_url, filename)
    except Exception as e:
        salvaged: List[ConversationMessage] = e.messages if isinstance(e, ModelResponseError) else []
        logger.warning(
            "Remote analysis failed (%s); using heuristic fallback with %s",
            e, f"{len(salvaged)} salvaged messages" if salvaged else "demo conversation",
        )
        if fallback is None:
            fallback = HeuristicAnalyzer(salvaged or None)
        return fallback.analyze(image_data_url, filename)
