from typing import Optional
from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from .config import Settings, get_settings
from .errors import ArticleError
from .schemas import ErrorResponse, SaveArticleResponse
from .service import publish_article
from .storage import ensure_dir
from .utils.logging import get_logger

log = get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="Article Maker", version=settings.app_version)
    app.state.settings = settings

    if settings.allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.allowed_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.on_event("startup")
    def on_startup():
        try:
            ensure_dir(settings.articles_dir)
        except ArticleError:
            log.warning(f"Article directory {settings.articles_dir} unavailable at startup")

    @app.exception_handler(ArticleError)
    async def article_error_handler(request: Request, exc: ArticleError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.get("/health")
    def health():
        return {"ok": True, "version": settings.app_version}

    @app.get("/", include_in_schema=False)
    def index():
        return FileResponse(settings.static_dir / "index.html")

    @app.post(
        "/save-article",
        response_model=SaveArticleResponse,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    async def save_article(request: Request):
        body = await request.body()
        try:
            saved = await run_in_threadpool(publish_article, body, settings)
        except ArticleError:
            raise
        except Exception as e:
            log.exception(f"Unexpected error saving article: {e}")
            return JSONResponse(status_code=500, content={"error": "internal_error"})
        return SaveArticleResponse(filename=saved.filename, articleURL=saved.public_url)

    app.mount("/static", StaticFiles(directory=settings.static_dir, check_dir=False), name="static")
    app.mount(
        settings.articles_url_prefix.rstrip("/"),
        StaticFiles(directory=settings.articles_dir, check_dir=False),
        name="articles",
    )
    return app


app = create_app()
