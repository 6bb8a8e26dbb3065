# fittrack/main.py
import time
import logging
import uuid
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from fittrack.routers.workouts import router as workouts_router
from fittrack.db import SessionLocal  # for healthz DB check
from fittrack.settings import get_settings

settings = get_settings()
logging.basicConfig(level=settings.LOG_LEVEL.upper())
log = logging.getLogger("uvicorn")

app = FastAPI(
    title="FitTrack API",
    openapi_tags=[
        {"name": "workouts", "description": "Workout sessions, history, statistics and demo data transfer"},
    ],
)


# CORS (relax for local dev; tighten origins in prod via env)
ALLOW_ORIGINS = settings.ALLOW_ORIGINS.split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOW_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def add_request_id_and_log(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    response.headers["X-Request-ID"] = req_id
    log.info("rid=%s %s %s -> %s in %.1fms",
             req_id, request.method, request.url.path, response.status_code, duration_ms)
    return response

@app.get("/")
def root():
    return {"ok": True, "name": "FitTrack API"}

@app.get("/ping")
def ping():
    return {"pong": True}

@app.get("/healthz")
async def healthz():
    # Quick DB sanity check
    try:
        async with SessionLocal() as db:
            await db.execute(text("SELECT 1"))
        return {"status": "ok"}
    except Exception as e:
        return {"status": "degraded", "error": str(e)}

@app.get("/version")
def version():
    return {"version": settings.API_VERSION}

# Routers
app.include_router(workouts_router)
