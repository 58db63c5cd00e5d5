"""Script para iniciar o servidor FastAPI na porta definida em PORT (padrão 3000)."""
import logging
import os
import sys

# Adiciona o diretório atual ao path
sys.path.insert(0, os.path.dirname(__file__))

try:
    from dotenv import load_dotenv
    load_dotenv(os.path.join(os.path.dirname(__file__), ".env"))
except Exception:
    pass

# Configurar logging antes de importar a aplicação
log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", "3000"))
    logging.getLogger(__name__).info(f"Servidor rodando na porta {port}")
    uvicorn.run("app.main:app", host="0.0.0.0", port=port, log_config=None)
