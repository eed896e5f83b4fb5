"""Run the API server: python -m bloggers."""

import uvicorn

from bloggers.config.settings import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "bloggers.api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
