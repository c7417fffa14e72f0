# tests/conftest.py
import pytest


def _remote_payload(score=72):
    return {
        "analysis": {
            "parsedMessages": [
                {"id": "0", "sender": "personA", "text": "miss you"},
                {"id": "1", "sender": "personB", "text": "aw really?"},
            ],
            "romanticInterestScore": score,
            "confidence": "Low",
            "summary": "Target seems into you.",
            "messageInsights": [
                {"messageId": "0", "sender": "personA", "impact": "helped", "explanation": "warm", "confidence": "Low"},
                {"messageId": "1", "sender": "personB", "impact": "neutral", "explanation": "ok", "confidence": "Low"},
            ],
            "suggestions": ["Say it back."],
            "model": {"provider": "openai", "version": "gpt-4o"},
        },
        "queryContextId": "ctx-1",
    }


@pytest.fixture
def remote_payload():
    """Factory for a well-formed model response; pass score= to break it."""
    return _remote_payload
