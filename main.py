# main.py - JSON API for the livraria app: catalog books and per-device favorites
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from config import get_settings
from database import init_db
from errors import ServiceError
from routers import favoritos, livros

settings = get_settings()
logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    yield


app = FastAPI(title="Livraria", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(favoritos.router)
app.include_router(livros.router)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    return PlainTextResponse(exc.message, status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    # missing query params and malformed bodies are client errors, reported like the service ones
    message = "; ".join(
        "{}: {}".format(".".join(str(part) for part in error["loc"]), error["msg"]) for error in exc.errors()
    )
    logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
    return PlainTextResponse(message, status_code=400)


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return PlainTextResponse("Internal Server Error", status_code=500)
