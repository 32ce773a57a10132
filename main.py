# main.py
"""Development launcher: serves the API with uvloop and httptools."""

from uvicorn import run

from quillblog.configs import settings

HOST = "127.0.0.1"
PORT = 8000


def main() -> None:
    run(
        "quillblog.main:app",
        host=HOST,
        port=PORT,
        reload=settings.ENVIRONMENT == "development",
        log_level=settings.LOG_LEVEL.lower(),
        loop="uvloop",
        http="httptools",
    )


if __name__ == "__main__":
    main()
