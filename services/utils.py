import base64, json, re
from typing import Any, List, Optional

from pydantic import ValidationError

from schemas import ConversationMessage, ScreenshotAnalysisResult

def strict_json_loads(text: str):
    starts = [m.start() for m in re.finditer(r'\{', text)]
    for s in starts:
        depth = 0
        for i, ch in enumerate(text[s:], start=s):
            if ch == '{': depth += 1
            elif ch == '}':
                depth -= 1
                if depth == 0:
                    cand = text[s:i+1]
                    try:
                        return json.loads(cand)
                    except ValueError:
                        break
    raise ValueError("No valid JSON found in output")

def extract_json(txt: str) -> Any:
    try:
        return strict_json_loads(txt)
    except ValueError:
        m = re.search(r"\{[\s\S]*\}", txt)
        if not m:
            raise ValueError("model did not return JSON")
        return json.loads(m.group(0))

def _as_dict(payload: Any) -> Optional[dict]:
    if isinstance(payload, str):
        try:
            payload = extract_json(payload)
        except ValueError:
            return None
    return payload if isinstance(payload, dict) else None

def parse_model_response(payload: Any) -> Optional[ScreenshotAnalysisResult]:
    """Validated result from raw model output (str or dict), or None."""
    data = _as_dict(payload)
    if not data or not isinstance(data.get("analysis"), dict):
        return None
    if "parsedMessages" not in data["analysis"]:
        return None
    try:
        return ScreenshotAnalysisResult.model_validate(data)
    except ValidationError:
        return None

def salvage_messages(payload: Any) -> List[ConversationMessage]:
    """Whatever well-formed messages the model did manage to extract."""
    data = _as_dict(payload)
    analysis = data.get("analysis") if data else None
    raw = analysis.get("parsedMessages") if isinstance(analysis, dict) else None
    return normalize_conversation(raw)

def normalize_conversation(conversation: Any) -> List[ConversationMessage]:
    """Keep entries with string text and a known sender; missing ids become positional."""
    if not isinstance(conversation, list):
        return []
    messages = []
    for index, entry in enumerate(conversation):
        if not isinstance(entry, dict):
            continue
        if not isinstance(entry.get("text"), str) or entry.get("sender") not in ("personA", "personB"):
            continue
        timestamp = entry.get("timestamp")
        messages.append(ConversationMessage(
            id=str(entry.get("id") if entry.get("id") is not None else index),
            sender=entry["sender"],
            text=entry["text"],
            timestamp=timestamp if isinstance(timestamp, str) else None,
        ))
    return messages

def format_transcript(messages: List[ConversationMessage]) -> str:
    names = {"personA": "Target", "personB": "You"}
    return "\n".join(f"{names[m.sender]}: {m.text}" for m in messages)

def to_data_url(data: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"
