# main.py

from uvicorn import run

from blog_api.configs import settings
from blog_api.main import app


def main() -> None:
    run(
        "blog_api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.ENVIRONMENT == "development",
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    __all__ = ["app"]
    main()
