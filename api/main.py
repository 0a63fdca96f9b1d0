from fastapi import FastAPI

from core.logger_config import setup_logging
from core.system_config import sys_config

setup_logging(log_dir=sys_config.run_log_dir, level=sys_config.log_level)

from api.routers import documents

app = FastAPI(title="Document Template Editor")

app.include_router(documents.router)


@app.get("/api/health")
async def health_check():
    return {"status": "ok"}
