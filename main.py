import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import FRONTEND_URL, LOG_LEVEL
from errors import AppError
from routers.feed_router import router as feed_router
from routers.trades_router import router as trades_router
from routers.journals_router import router as journals_router
from routers.follows_router import router as follows_router
from routers.users_router import router as users_router
from routers.stocks_router import router as stocks_router

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
)
logger = logging.getLogger("main")

app = FastAPI(
    title="Trade Diary API",
    description="Trade journal, statistics and social feed API"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        FRONTEND_URL,
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(feed_router)
app.include_router(trades_router)
app.include_router(journals_router)
app.include_router(follows_router)
app.include_router(users_router)
app.include_router(stocks_router)


# ─── Error mapping ───────────────────────────────────────────────────────────

@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# ─── Health ──────────────────────────────────────────────────────────────────

@app.get("/health")
async def health_check():
    return {"status": "healthy"}
