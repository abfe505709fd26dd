"""
FUNNEL_BUILDER — FastAPI app
Démarrer : uvicorn funnel_builder.api:app --reload --port 8002
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__, config
from .router import router

logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s — %(message)s")
log = logging.getLogger(__name__)

app = FastAPI(title="FUNNEL_BUILDER — Rendu des pages publiées", version=__version__, docs_url="/docs")

app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

app.include_router(router)


@app.get("/health")
def health():
    return {"status": "ok", "service": "funnel_builder", "version": __version__}
