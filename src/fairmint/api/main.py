from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from fairmint import config as settings
from fairmint.version import __version__
from . import emission

logger = logging.getLogger(__name__)

app = FastAPI(title="fairmint", version=__version__)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(emission.router)


@app.get("/health")
async def health():
    return {"status": "ok", "version": __version__}
