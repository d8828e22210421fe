from pathlib import Path
from typing import Optional
from pydantic import BaseModel, ConfigDict


class SaveArticleRequest(BaseModel):
    htmlContent: str
    articleName: Optional[str] = None


class SavedArticle(BaseModel):
    model_config = ConfigDict(frozen=True)

    filename: str
    file_path: Path
    public_url: str


class SaveArticleResponse(BaseModel):
    message: str = "Article published!"
    filename: str
    articleURL: str


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
