"""
Main FastAPI application.
"""

from typing import Optional, List

from dotenv import load_dotenv
from fastapi import FastAPI, File, UploadFile, HTTPException, Depends
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware

from md2marp import __version__
from md2marp.pipeline import Md2MarpPipeline
from md2marp.renderers import THEMES, THEME_NAMES
from server.models import ConversionSettings, ConversionRequest, ConversionResponse, ThemeInfo

load_dotenv()

MARKDOWN_SUFFIXES = (".md", ".markdown")

app = FastAPI(
    title="md2marp API",
    description="Convert Markdown documents into Marp slide decks",
    version=__version__,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://localhost:3001"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def run_conversion(
    content: bytes,
    settings: ConversionSettings,
    title: Optional[str] = None,
) -> ConversionResponse:
    """Run the pipeline and map configuration errors to HTTP 400."""
    try:
        pipeline = Md2MarpPipeline.from_settings(settings)
        result = pipeline.convert(content, title=title)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return ConversionResponse(
        marp=result.marp,
        slide_count=result.slide_count,
        title=result.title,
        failed_slides=result.failed_slides,
    )


# --- API Endpoints ---

@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "message": "md2marp API is running"}


@app.get("/api/themes", response_model=List[ThemeInfo])
async def list_themes():
    """List available Marp themes."""
    return [
        ThemeInfo(index=i, name=name, directives=THEMES[name])
        for i, name in enumerate(THEME_NAMES)
    ]


@app.post("/api/convert", response_model=ConversionResponse)
async def convert_markdown(request: ConversionRequest):
    """
    Convert Markdown text into a Marp deck.

    Summarization blocks for the whole batch schedule, so it runs off the event loop.
    """
    settings = ConversionSettings(**request.model_dump(exclude={"markdown", "title"}))
    return await run_in_threadpool(
        run_conversion, request.markdown.encode("utf-8"), settings, request.title
    )


@app.post("/api/upload", response_model=ConversionResponse)
async def upload_markdown(
    file: UploadFile = File(...),
    title: Optional[str] = None,
    settings: ConversionSettings = Depends(),
):
    """
    Upload a Markdown file and convert it.

    Settings are passed as query parameters.
    """
    # Validate file type
    if not file.filename or not file.filename.lower().endswith(MARKDOWN_SUFFIXES):
        raise HTTPException(status_code=400, detail="Only Markdown files are allowed")

    content = await file.read()
    return await run_in_threadpool(run_conversion, content, settings, title)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
