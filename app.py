# app.py
import os
import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, File, UploadFile, HTTPException

from schemas import (
    CupidAnswer,
    CupidRequest,
    ScoreRequest,
    ScreenshotAnalysisResult,
    UploadedFileInfo,
    UploadResponse,
)
from services.analyzer import analyze_screenshot
from services.cupid import ask_cupid
from services.heuristic import build_fallback_result
from services.utils import normalize_conversation, to_data_url

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))
ALLOWED_MIME_TYPES = (
    "image/png",
    "image/jpeg",
    "image/jpg",
    "image/webp",
    "image/heic",
    "image/heif",
)
EXTENSION_MIME_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".webp": "image/webp",
    ".heic": "image/heic",
    ".heif": "image/heif",
}
# sent by clients that don't know the type; we fall back to the extension
UNTYPED = ("", "application/octet-stream")

app = FastAPI(title="Screenshot romance coach API")


# --- Upload helpers -------------------------------------------------------
def infer_mime_type(filename: str, content_type: Optional[str]) -> str:
    if content_type and content_type.lower() in ALLOWED_MIME_TYPES:
        return content_type.lower()
    return EXTENSION_MIME_TYPES.get(Path(filename or "").suffix.lower(), "image/png")


@app.get("/")
def root():
    return {"status": "Screenshot romance coach API running"}


# --- Upload endpoint ------------------------------------------------------
@app.post("/api/upload", response_model=UploadResponse)
async def upload(file: Optional[UploadFile] = File(None)):
    """
    Analyze a conversation screenshot. Falls back to the keyword scorer when
    the vision model is unavailable, so a valid upload always gets an analysis.
    """
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="Upload requires a non-empty `file` field.")

    content_type = (file.content_type or "").lower()
    if content_type not in UNTYPED and content_type not in ALLOWED_MIME_TYPES:
        raise HTTPException(
            status_code=415,
            detail="Unsupported image type. Please upload png, jpg, jpeg, webp, heic, or heif files.",
        )

    data = await file.read()
    if not data:
        raise HTTPException(status_code=400, detail="Upload requires a non-empty `file` field.")
    if len(data) > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail="Screenshot must be a non-empty image <= 10MB.")

    mime_type = infer_mime_type(file.filename, content_type)
    try:
        analysis = analyze_screenshot(to_data_url(data, mime_type), file.filename)
    except Exception:
        logger.exception("[upload-route] analysis failed for %s", file.filename)
        raise HTTPException(status_code=500, detail="Unable to process the uploaded screenshot.")

    return UploadResponse(
        file=UploadedFileInfo(name=file.filename, size=len(data), mimeType=mime_type),
        analysis=analysis,
    )


# --- Direct scoring -------------------------------------------------------
@app.post("/api/score", response_model=ScreenshotAnalysisResult)
def score(payload: ScoreRequest):
    """Keyword score for an already-parsed conversation. No model call."""
    conversation = normalize_conversation(payload.conversation)
    return build_fallback_result(conversation, payload.filename)


# --- Ask Cupid ------------------------------------------------------------
@app.post("/api/cupid", response_model=CupidAnswer)
def cupid(payload: CupidRequest):
    question = payload.question.strip()
    conversation = normalize_conversation(payload.conversation)

    if not question:
        raise HTTPException(status_code=400, detail="Provide a question to ask Cupid.")
    if not conversation:
        raise HTTPException(status_code=400, detail="Include the parsed conversation for context.")

    try:
        return ask_cupid(conversation, question)
    except Exception:
        logger.exception("[cupid-route] question failed")
        raise HTTPException(status_code=500, detail="Cupid is thinking too hard right now. Try again shortly.")


# If run directly for local dev
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app:app", host="0.0.0.0", port=int(os.getenv("PORT", 8001)), reload=True)
