from pydantic import BaseModel, ConfigDict, Field
from typing import List, Literal, Optional

Sender = Literal["personA", "personB"]
Impact = Literal["helped", "neutral", "hurt"]
ConfidenceLevel = Literal["Low", "Medium", "High"]

class ConversationMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    sender: Sender
    text: str
    timestamp: Optional[str] = None

class MessageInsight(BaseModel):
    messageId: str
    sender: Sender
    impact: Impact
    explanation: str
    confidence: ConfidenceLevel

class ModelInfo(BaseModel):
    provider: Literal["openai", "replicate", "mock"]
    version: str

class RomanticAnalysis(BaseModel):
    parsedMessages: List[ConversationMessage]
    romanticInterestScore: int = Field(ge=0, le=100)
    confidence: ConfidenceLevel
    summary: str
    messageInsights: List[MessageInsight]
    suggestions: List[str]
    model: ModelInfo

class ScreenshotAnalysisResult(BaseModel):
    analysis: RomanticAnalysis
    queryContextId: str

class UploadedFileInfo(BaseModel):
    name: str
    size: int
    mimeType: str

class UploadResponse(BaseModel):
    file: UploadedFileInfo
    analysis: ScreenshotAnalysisResult

class ScoreRequest(BaseModel):
    conversation: list = []
    filename: Optional[str] = None

class CupidRequest(BaseModel):
    question: str = ""
    conversation: list = []

class CupidAnswer(BaseModel):
    answer: str
    model: ModelInfo
