import os
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.route import router
from app.db.session import dispose_engine, get_engine
from app.exceptions import InfrastructureError, InscricaoError

logger = logging.getLogger(__name__)

# Carrega variáveis de ambiente do .env
try:
    from dotenv import load_dotenv
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env")
    load_dotenv(".env")
except Exception:
    pass

INTERNAL_ERROR_MESSAGE = "Erro interno do servidor."


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Teste inicial do pool: só loga, não impede a subida da API
    try:
        with get_engine().connect() as connection:
            connection.execute(text("SELECT 1"))
        logger.info("Conectado ao banco com pool de conexões")
    except SQLAlchemyError as e:
        logger.error(f"Erro ao conectar no banco: {e}")
    yield
    dispose_engine()


app = FastAPI(
    title="Inscrições API",
    description="API de cadastro, inscrição socioeconômica e análise administrativa",
    version="1.0.0",
    lifespan=lifespan,
)

# Configuração CORS
# Pode ser restringido via variável de ambiente CORS_ORIGINS (separado por vírgula)
cors_origins_env = os.getenv("CORS_ORIGINS", "*")
cors_origins = [origin.strip() for origin in cors_origins_env.split(",") if origin.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


@app.exception_handler(InscricaoError)
async def domain_exception_handler(request: Request, exc: InscricaoError):
    if isinstance(exc, InfrastructureError):
        # Detalhe interno fica no log; o cliente recebe só a mensagem genérica.
        logger.error(f"Erro de infraestrutura em {request.method} {request.url.path}: {exc}", exc_info=exc)
        return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(status_code=exc.status_code, content={"error": message})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Normaliza erros de validação (422) para payload consistente.
    return JSONResponse(
        status_code=422,
        content=jsonable_encoder({"error": "Dados inválidos.", "details": exc.errors()}),
    )


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Erro no banco em {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    # Loga o erro completo para debug
    logger.error(f"Erro não tratado: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})
