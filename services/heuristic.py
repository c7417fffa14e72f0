# services/heuristic.py
"""
Keyword-based fallback scorer.

Runs when the vision model is unavailable or returns something we can't parse.
Pure and deterministic: same messages in, same analysis out.
"""
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from schemas import (
    ConversationMessage,
    MessageInsight,
    ModelInfo,
    RomanticAnalysis,
    ScreenshotAnalysisResult,
)

BASELINE_SCORE = 55
POINTS_PER_HIT = 6
MOCK_CONTEXT_ID = "mock-context"


@dataclass(frozen=True)
class KeywordTables:
    positive: Tuple[str, ...]
    curious: Tuple[str, ...]
    negative: Tuple[str, ...]
    supportive: Tuple[str, ...]


DEFAULT_KEYWORDS = KeywordTables(
    positive=("great", "cute", "love", "miss", "soon", "excited", "fun", "haha", "😊", "❤", "can't wait"),
    curious=("?", "what's", "what are", "what do", "how", "why", "when", "where", "tell me", "maybe", "would you", "wanna"),
    negative=("busy", "not sure", "idk", "sorry", "tired", "later", "nah", "whatever", "no thanks"),
    supportive=("proud", "you got this", "happy for you", "amazing", "thank you", "glad", "sweet"),
)

EXPLANATIONS = {
    "warmth": "Positive language and warmth keeps momentum.",
    "curiosity": "Follow-up questions show interest and investment.",
    "distance": "Hesitation or distancing language lowers momentum.",
    "steady": "This message maintains tone without major impact.",
}

SUMMARIES = {
    "encouraging": "Target is sending encouraging signals. Warm language and easy back-and-forth suggest real interest in you.",
    "mixed": "The signals are mixed. Target is friendly, but there isn't enough warmth yet to call it either way.",
    "low": "Warmth is low so far. Target's replies read as hesitant or distant.",
}

SUGGESTIONS = [
    "Mirror Target's energy and keep your replies about the same length as theirs.",
    "Ask an open question about something Target mentioned to keep the thread going.",
    "Suggest a specific plan with a day and time instead of a vague 'sometime'.",
]

# Demo conversation used when nothing was extracted from the screenshot.
FALLBACK_CONVERSATION = [
    ConversationMessage(id="0", sender="personA", text="Hey! Had an awesome time last night 😊"),
    ConversationMessage(id="1", sender="personB", text="Same! I'm still laughing about the karaoke haha"),
    ConversationMessage(id="2", sender="personA", text="We should do another adventure soon, maybe the night market?"),
    ConversationMessage(id="3", sender="personB", text="That sounds fun, I am free Friday after 7!"),
]


@dataclass(frozen=True)
class KeywordHits:
    positive: int
    curious: int
    negative: int
    supportive: int


def count_hits(text: str, keywords: Sequence[str]) -> int:
    return sum(text.count(kw) for kw in keywords)


def keyword_hits(text: str, tables: KeywordTables = DEFAULT_KEYWORDS) -> KeywordHits:
    # curly apostrophes count as straight ones
    lowered = text.lower().replace("\u2019", "'")
    return KeywordHits(
        positive=count_hits(lowered, tables.positive),
        curious=count_hits(lowered, tables.curious),
        negative=count_hits(lowered, tables.negative),
        supportive=count_hits(lowered, tables.supportive),
    )


def message_confidence(text: str) -> str:
    """Length stands in for effort. Not a statistical measure."""
    if len(text) > 40:
        return "High"
    if len(text) > 15:
        return "Medium"
    return "Low"


def classify_message(message: ConversationMessage, tables: KeywordTables = DEFAULT_KEYWORDS) -> MessageInsight:
    hits = keyword_hits(message.text, tables)

    # first match wins
    if hits.positive + hits.supportive > hits.negative and hits.positive > 0:
        impact, reason = "helped", "warmth"
    elif message.sender == "personB" and hits.curious > 0:
        impact, reason = "helped", "curiosity"
    elif hits.negative > hits.positive:
        impact, reason = "hurt", "distance"
    else:
        impact, reason = "neutral", "steady"

    return MessageInsight(
        messageId=message.id,
        sender=message.sender,
        impact=impact,
        explanation=EXPLANATIONS[reason],
        confidence=message_confidence(message.text),
    )


def interest_score(messages: Sequence[ConversationMessage], tables: KeywordTables = DEFAULT_KEYWORDS) -> int:
    hits = [keyword_hits(m.text, tables) for m in messages]
    positive_count = sum(h.positive for h in hits)
    negative_count = sum(h.negative for h in hits)
    base = BASELINE_SCORE + (positive_count - negative_count) * POINTS_PER_HIT
    return int(round(min(max(base, 0), 100)))


def aggregate_confidence(message_count: int) -> str:
    if message_count >= 8:
        return "High"
    if message_count >= 4:
        return "Medium"
    return "Low"


def summarize(score: int) -> str:
    if score >= 70:
        return SUMMARIES["encouraging"]
    if score >= 50:
        return SUMMARIES["mixed"]
    return SUMMARIES["low"]


def mock_model_info(filename_hint: Optional[str] = None) -> ModelInfo:
    version = f"mock-from-{filename_hint}" if filename_hint else "mock-v1"
    return ModelInfo(provider="mock", version=version)


def score_conversation(
    messages: Sequence[ConversationMessage],
    filename_hint: Optional[str] = None,
    tables: KeywordTables = DEFAULT_KEYWORDS,
) -> RomanticAnalysis:
    """
    Score a parsed conversation without calling any model.

    Never raises for validated messages; an empty list scores the baseline
    with Low confidence and no insights.
    """
    parsed: List[ConversationMessage] = list(messages)
    score = interest_score(parsed, tables)
    return RomanticAnalysis(
        parsedMessages=parsed,
        romanticInterestScore=score,
        confidence=aggregate_confidence(len(parsed)),
        summary=summarize(score),
        messageInsights=[classify_message(m, tables) for m in parsed],
        suggestions=list(SUGGESTIONS),
        model=mock_model_info(filename_hint),
    )


def build_fallback_result(
    messages: Optional[Sequence[ConversationMessage]] = None,
    filename_hint: Optional[str] = None,
    tables: KeywordTables = DEFAULT_KEYWORDS,
) -> ScreenshotAnalysisResult:
    if messages is None:
        messages = FALLBACK_CONVERSATION
    analysis = score_conversation(messages, filename_hint, tables)
    return ScreenshotAnalysisResult(analysis=analysis, queryContextId=MOCK_CONTEXT_ID)
