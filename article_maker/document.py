from pathlib import Path
from typing import Optional, Union
from jinja2 import Environment, FileSystemLoader, Template, TemplateError
from markupsafe import Markup
from .config import PACKAGE_DIR
from .errors import TemplateUnavailable
from .utils.logging import get_logger

log = get_logger(__name__)

env = Environment(loader=FileSystemLoader(str(PACKAGE_DIR / "templates")), autoescape=True)
DEFAULT_TEMPLATE = "article.html"


def load_template(path: Optional[Union[str, Path]] = None) -> Template:
    """Built-in article template, or the one at `path` read fresh from disk."""
    if path is None:
        return env.get_template(DEFAULT_TEMPLATE)
    try:
        source = Path(path).read_text(encoding="utf-8")
        return env.from_string(source)
    except (OSError, UnicodeDecodeError, TemplateError) as e:
        log.error(f"Failed to read article template {path}: {e}")
        raise TemplateUnavailable() from e


def build_document(title: Optional[str], content: str, template: Optional[Template] = None) -> str:
    """
    Render a standalone HTML document. The title is escaped; `content` must
    already be sanitized and is embedded as-is.
    """
    template = template or load_template()
    return template.render(title=title or "", content=Markup(content))
