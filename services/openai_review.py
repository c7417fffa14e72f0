# services/openai_review.py
import os
from typing import Any, Dict
from openai import OpenAI
from services.utils import extract_json
from prompts import USER_PROMPT, build_system_prompt

REVIEW_MODEL = os.getenv("REVIEW_MODEL", "gpt-4o")
BACKUP_REVIEW_MODEL = "gpt-4o-mini"

def _client() -> OpenAI:
    key = os.getenv("OPENAI_API_KEY", "")
    if not key:
        raise RuntimeError("OPENAI_API_KEY not set")
    return OpenAI(api_key=key)

def _call_openai(model: str, image_data_url: str) -> str:
    sys = build_system_prompt("openai", model)
    resp = _client().chat.completions.create(
        model=model,
        temperature=0,
        max_tokens=2048,
        messages=[
            {"role": "system", "content": sys},
            {"role": "user", "content": [
                {"type": "text", "text": USER_PROMPT.strip()},
                {"type": "image_url", "image_url": {"url": image_data_url}}
            ]}
        ],
    )
    return (resp.choices[0].message.content or "").strip()

def evaluate_screenshot(image_data_url: str) -> Dict[str, Any]:
    last_err = None
    for model in (REVIEW_MODEL, BACKUP_REVIEW_MODEL):
        try:
            txt = _call_openai(model, image_data_url)
            return extract_json(txt)
        except Exception as e:
            last_err = e
            continue
    raise RuntimeError(f"OpenAI review failed: {last_err}")
