import os, replicate
from services.utils import extract_json
from prompts import USER_PROMPT, build_system_prompt

REPLICATE_TOKEN = os.getenv("REPLICATE_API_TOKEN")
REPLICATE_REVIEW_MODEL = os.getenv("REPLICATE_REVIEW_MODEL", "meta/meta-llama-3.2-11b-vision-instruct")

def _join_output(out) -> str:
    return "".join(map(str, out)) if isinstance(out, list) else str(out)

def evaluate_screenshot(image_data_url: str):
    if not REPLICATE_TOKEN:
        raise RuntimeError("REPLICATE_API_TOKEN not set")
    client = replicate.Client(api_token=REPLICATE_TOKEN)
    system_prompt = build_system_prompt("replicate", REPLICATE_REVIEW_MODEL)
    user_prompt = USER_PROMPT.strip()

    # Attempt 1: messages schema
    try:
        out = client.run(
            REPLICATE_REVIEW_MODEL,
            input={
                "messages": [
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": [
                        {"type": "input_text", "text": user_prompt},
                        {"type": "input_image", "image": image_data_url}
                    ]}
                ]
            }
        )
        return extract_json(_join_output(out))
    except Exception:
        # Attempt 2: prompt + image fields
        out = client.run(
            REPLICATE_REVIEW_MODEL,
            input={"prompt": f"{system_prompt}\n\n{user_prompt}\n\nReturn ONLY JSON.", "image": image_data_url}
        )
        return extract_json(_join_output(out))
