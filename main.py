import uvicorn

from centscape.config.logging_config import setup_logging
from centscape.core.config import settings

# Set up logging first
setup_logging(settings.log_level, settings.log_dir)

from centscape.main import app  # noqa: E402


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.server_reload
    )
