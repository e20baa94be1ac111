import logging
import time

from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import (
    Counter,
    Histogram,
    generate_latest,
    CONTENT_TYPE_LATEST,
)

from . import pipeline
from .config import CACHE_MAX_AGE, LOG_LEVEL
from .results import InvalidQuery
from .schemas import ApproachEnvelope, CatalogEnvelope

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

app = FastAPI(title="spacewatch")
app.add_middleware(CORSMiddleware, allow_origins=["*"])

# Prometheus metrics
REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "http_status"],
)
REQUEST_LATENCY = Histogram(
    "http_request_latency_seconds",
    "HTTP request latency",
    ["method", "endpoint"],
)


@app.middleware("http")
async def metrics_middleware(request: Request, call_next):
    method = request.method
    endpoint = request.url.path
    start_time = time.monotonic()
    response = await call_next(request)
    duration = time.monotonic() - start_time
    REQUEST_COUNT.labels(method=method, endpoint=endpoint, http_status=response.status_code).inc()
    REQUEST_LATENCY.labels(method=method, endpoint=endpoint).observe(duration)
    return response


def _cacheable(response: Response) -> None:
    response.headers["Cache-Control"] = f"public, max-age={CACHE_MAX_AGE}, s-maxage={CACHE_MAX_AGE}"


@app.get("/")
async def index():
    return {"service": "spacewatch", "feeds": ["/spacetrack", "/asteroids"]}


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/spacetrack", response_model=CatalogEnvelope)
def get_spacetrack(
    response: Response,
    type: str | None = None,
    country: str | None = None,
    active: str | None = None,
    orbit: str | None = None,
    limit: int | None = None,
):
    try:
        query = pipeline.parse_catalog_query(type, country, active, orbit, limit)
    except InvalidQuery as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    envelope = pipeline.get_catalog(query)
    if not envelope.is_mock:
        _cacheable(response)
    return envelope


@app.get("/asteroids", response_model=ApproachEnvelope)
def get_asteroids(
    response: Response,
    start: str | None = None,
    end: str | None = None,
    hazardous: str | None = None,
):
    try:
        query = pipeline.parse_approach_query(start, end, hazardous)
    except InvalidQuery as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    envelope = pipeline.get_approaches(query)
    if not envelope.is_mock:
        _cacheable(response)
    return envelope


@app.get("/metrics")
async def metrics():
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
