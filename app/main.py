from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
import logging

from app.core.config import settings
from app.core.errors import RegistrationError
from app.api.v1.router import api_router

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"--- 🏁 {settings.PROJECT_NAME} iniciada (banco: {settings.STORE_BACKEND}) ---")
    yield

app = FastAPI(
    title=settings.PROJECT_NAME,
    lifespan=lifespan
)

origins = [
    "http://localhost:4321",
    "http://localhost:8888",
    settings.FRONTEND_URL,
]
origins = list(set(origins))

# Responde o preflight (OPTIONS) antes de qualquer autenticação
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- ERROS: sempre {"error": mensagem} ---

@app.exception_handler(RegistrationError)
async def registration_error_handler(request: Request, exc: RegistrationError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} falhou: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=getattr(exc, "headers", None))

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        message = f"{field}: {first.get('msg')}" if field else first.get("msg")
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"error": message})

@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    # A causa fica só no log
    logger.exception(f"Erro inesperado em {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})

app.include_router(api_router, prefix=settings.API_V1_STR)

@app.get("/")
def root():
    return {"message": f"{settings.PROJECT_NAME} está rodando!"}
