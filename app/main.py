# app/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.config import settings
from app.db import Base, engine
from app.errors import DomainError
from app.middleware import RequestIdMiddleware
from app.routers import dining, menu, orders
from app.schemas.common import ErrorOut
from app.util.log import configure_logging

configure_logging(settings.LOG_LEVEL, as_json=settings.LOG_JSON)
logger = logging.getLogger(__name__)

app = FastAPI(title="Kitchen POS API", version="0.1.0")

@app.on_event("startup")
def init_db():
    Base.metadata.create_all(bind=engine)
    logger.info("database ready env=%s", settings.APP_ENV)

# Middlewares
app.add_middleware(RequestIdMiddleware)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    logger.warning("request rejected: %s", exc.message, extra={"code": exc.code})
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorOut(detail=exc.message, code=exc.code, retryable=exc.retryable).model_dump(),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content=ErrorOut(detail="internal server error", code="InternalError").model_dump(),
    )


app.include_router(menu.products_router)
app.include_router(menu.router)
app.include_router(orders.router)
app.include_router(dining.router)

@app.get("/healthz")
def healthz():
    return {"ok": True}
