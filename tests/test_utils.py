# tests/test_utils.py
import json

import pytest

from schemas import ConversationMessage
from services.utils import (
    format_transcript,
    normalize_conversation,
    parse_model_response,
    salvage_messages,
    strict_json_loads,
    to_data_url,
)


def test_strict_json_loads_skips_prose():
    assert strict_json_loads('Sure! {"a": {"b": 1}} hope that helps') == {"a": {"b": 1}}


def test_strict_json_loads_raises_without_json():
    with pytest.raises(ValueError):
        strict_json_loads("no json here")


def test_parse_model_response_from_dict(remote_payload):
    result = parse_model_response(remote_payload())
    assert result.queryContextId == "ctx-1"
    assert result.analysis.romanticInterestScore == 72
    assert result.analysis.model.provider == "openai"


def test_parse_model_response_from_fenced_text(remote_payload):
    text = "```json\n" + json.dumps(remote_payload()) + "\n```"
    result = parse_model_response(text)
    assert result is not None
    assert len(result.analysis.parsedMessages) == 2


@pytest.mark.parametrize("payload", [
    None,
    "",
    "not json",
    {"analysis": {"summary": "no messages"}},
    {"queryContextId": "x"},
])
def test_parse_model_response_rejects_bad_payloads(payload):
    assert parse_model_response(payload) is None


def test_salvage_messages_from_invalid_analysis(remote_payload):
    messages = salvage_messages(remote_payload(score=150))
    assert [m.text for m in messages] == ["miss you", "aw really?"]


def test_salvage_messages_without_analysis():
    assert salvage_messages("garbage") == []
    assert salvage_messages({"analysis": "nope"}) == []


def test_normalize_conversation_filters_and_assigns_ids():
    raw = [
        {"sender": "personA", "text": "hey"},
        {"sender": "someone", "text": "dropped"},
        "not a dict",
        {"sender": "personB", "text": 42},
        {"id": "x", "sender": "personB", "text": "hi", "timestamp": "10:02"},
    ]
    messages = normalize_conversation(raw)

    assert [m.id for m in messages] == ["0", "x"]
    assert messages[1].timestamp == "10:02"


def test_normalize_conversation_non_list():
    assert normalize_conversation({"sender": "personA"}) == []


def test_format_transcript_names_participants():
    messages = [
        ConversationMessage(id="0", sender="personA", text="hi"),
        ConversationMessage(id="1", sender="personB", text="hey"),
    ]
    assert format_transcript(messages) == "Target: hi\nYou: hey"


def test_to_data_url():
    assert to_data_url(b"abc", "image/png") == "data:image/png;base64,YWJj"


def test_parse_model_response_rejects_out_of_range_score(remote_payload):
    assert parse_model_response(remote_payload(score=150)) is None
