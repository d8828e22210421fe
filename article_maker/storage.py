from pathlib import Path
from typing import Union
from .errors import PersistenceFailure, StorageUnavailable
from .utils.logging import get_logger

log = get_logger(__name__)


def ensure_dir(path: Union[str, Path]) -> Path:
    base = Path(path)
    try:
        base.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        log.error(f"Failed to create directory {base}: {e}")
        raise StorageUnavailable() from e
    if not base.is_dir():
        log.error(f"Article path {base} is not a directory")
        raise StorageUnavailable()
    return base


def write_new_file(path: Path, text: str) -> Path:
    """
    Create `path` exclusively and write `text` to it.

    FileExistsError propagates so the caller can pick another name; any other
    write error becomes PersistenceFailure.
    """
    try:
        f = open(path, "x", encoding="utf-8")
    except FileExistsError:
        raise
    except OSError as e:
        log.error(f"Failed to create article file {path}: {e}")
        raise PersistenceFailure() from e
    try:
        with f:
            f.write(text)
    except (OSError, UnicodeError) as e:
        log.error(f"Failed to save article to {path}: {e}")
        # never leave a partial article behind to be served
        path.unlink(missing_ok=True)
        raise PersistenceFailure() from e
    return path
