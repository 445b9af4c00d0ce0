# src/pulseboard_backend/app/main.py
import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Load .env before anything reads provider keys
load_dotenv()

from pulseboard_backend.app.core.logging import report_missing_keys, setup_logging
setup_logging()
report_missing_keys()

from .api.routes.chat import router as chat_router
from .api.routes.debug import router as debug_router
from .api.routes.news import router as news_router
from .api.routes.sentiment import router as sentiment_router
from .api.routes.stocks import router as stocks_router
from .api.routes.summarize import router as summarize_router
from .api.routes.translate import router as translate_router
from .api.routes.weather import router as weather_router

log = logging.getLogger("pulseboard.app")

app = FastAPI(title="Pulseboard API", version="0.1.0")

# Dashboard dev servers
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://localhost:5173"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    log.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "message": "An unexpected error occurred."},
    )


@app.get("/healthz")
def health():
    return {"status": "ok"}


for _router in (
    chat_router,
    translate_router,
    sentiment_router,
    news_router,
    stocks_router,
    weather_router,
    summarize_router,
    debug_router,
):
    app.include_router(_router)
