from typing import Optional, Union
from pydantic import ValidationError
from .config import Settings, get_settings
from .document import build_document, load_template
from .errors import InvalidPayload, PersistenceFailure
from .naming import derive_filename
from .sanitize import sanitize_html
from .schemas import SaveArticleRequest, SavedArticle
from .storage import ensure_dir, write_new_file
from .utils.logging import get_logger

log = get_logger(__name__)

MAX_NAME_ATTEMPTS = 5


def parse_request(payload: Union[bytes, str, dict]) -> SaveArticleRequest:
    try:
        if isinstance(payload, dict):
            return SaveArticleRequest.model_validate(payload)
        return SaveArticleRequest.model_validate_json(payload)
    except ValidationError as e:
        log.warning(f"Rejected payload: {e.error_count()} error(s)")
        raise InvalidPayload(details=_describe(e)) from e


def _describe(e: ValidationError) -> str:
    parts = []
    for err in e.errors():
        loc = ".".join(str(x) for x in err.get("loc", ())) or "body"
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)


def save_article(req: SaveArticleRequest, settings: Optional[Settings] = None) -> SavedArticle:
    settings = settings or get_settings()

    content = sanitize_html(req.htmlContent)
    out_dir = ensure_dir(settings.articles_dir)

    template = load_template(settings.template_path)
    document = build_document(req.articleName, content, template)

    for attempt in range(MAX_NAME_ATTEMPTS):
        filename = derive_filename(req.articleName)
        path = out_dir / filename
        try:
            write_new_file(path, document)
        except FileExistsError:
            log.warning(f"Name collision on {filename} (attempt {attempt + 1})")
            continue
        log.info(f"Article saved: {path}")
        prefix = settings.articles_url_prefix.rstrip("/")
        return SavedArticle(filename=filename, file_path=path, public_url=f"{prefix}/{filename}")

    log.error(f"Gave up naming article after {MAX_NAME_ATTEMPTS} collisions")
    raise PersistenceFailure()


def publish_article(payload: Union[bytes, str, dict], settings: Optional[Settings] = None) -> SavedArticle:
    """Validate a raw submission and persist it; raises ArticleError subclasses."""
    return save_article(parse_request(payload), settings)
