"""python -m user_directory: serve the app with uvicorn on HOST:PORT."""

import uvicorn

from user_directory.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "user_directory.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
