# src/pulseboard_backend/app/server.py
import os

import uvicorn

APP_PATH = "pulseboard_backend.app.main:app"


def run() -> None:
    """
    Console entry point (`pulseboard`). HOST / PORT / LOG_LEVEL from the
    environment, defaulting to a local dev server on 127.0.0.1:8000.
    """
    uvicorn.run(
        APP_PATH,
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    run()
