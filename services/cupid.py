# services/cupid.py
import os
from typing import List

from schemas import ConversationMessage, CupidAnswer, ModelInfo
from services.openai_review import _client
from services.utils import format_transcript
from prompts import CUPID_SYSTEM_PROMPT, CUPID_USER_PROMPT_TEMPLATE

CUPID_MODEL = os.getenv("CUPID_MODEL", "gpt-4o-mini")

def ask_cupid(conversation: List[ConversationMessage], question: str) -> CupidAnswer:
    usr = CUPID_USER_PROMPT_TEMPLATE.format(
        transcript=format_transcript(conversation),
        question=question,
    ).strip()
    resp = _client().chat.completions.create(
        model=CUPID_MODEL,
        temperature=0.4,
        messages=[
            {"role": "system", "content": CUPID_SYSTEM_PROMPT.strip()},
            {"role": "user", "content": usr},
        ],
    )
    answer = (resp.choices[0].message.content or "").strip()
    if not answer:
        raise RuntimeError("Cupid returned an empty answer")
    return CupidAnswer(answer=answer, model=ModelInfo(provider="openai", version=CUPID_MODEL))
