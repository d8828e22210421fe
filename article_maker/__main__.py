import uvicorn
from .app import create_app
from .config import get_settings
from .utils.logging import get_logger

log = get_logger(__name__)


def main():
    settings = get_settings()
    log.info(f"Server starting on {settings.host}:{settings.port}")
    # uvicorn exits non-zero if the port cannot be bound
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
