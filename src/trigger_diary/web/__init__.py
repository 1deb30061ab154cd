"""HTTP API for Trigger Diary."""

import uvicorn

from ..utils.config import configure_logging, get_settings


def run(reload: bool = False):
    """Run the web server."""
    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(
        "trigger_diary.web.app:app",
        host=settings.host,
        port=settings.port,
        reload=reload,
    )


__all__ = ["run"]
