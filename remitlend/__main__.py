# python -m remitlend → uvicorn with the app factory, bound per Settings.

import uvicorn

from remitlend.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "remitlend.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
