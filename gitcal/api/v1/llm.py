"""
Direct prompt passthrough to the configured language model.
"""

from fastapi import APIRouter
from pydantic import BaseModel, Field

from gitcal.api.deps import LanguageModel
from gitcal.services.llm import extract_text

router = APIRouter(prefix="/llm", tags=["llm"])

GENERATE_FALLBACK = "Failed to generate response"


class GenerateRequest(BaseModel):
    prompt: str = Field(min_length=1)


class GenerateResponse(BaseModel):
    text: str


@router.post("/generate", response_model=GenerateResponse)
async def generate(data: GenerateRequest, llm: LanguageModel) -> GenerateResponse:
    """
    Send a prompt to the language model and return its text.

    Provider failures come back as "Error generating response: ..." text.
    """
    raw = await llm.generate(data.prompt)
    return GenerateResponse(text=extract_text(raw, GENERATE_FALLBACK))
