import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from microdata_reader.api.extract import router as extract_router
from microdata_reader.config import LOG_LEVEL

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s"
)

logger = logging.getLogger(__name__)


# --------------------------------------------------
# Startup / Shutdown
# --------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Microdata reader API started")
    yield
    logger.info("Microdata reader API shutting down")


# --------------------------------------------------
# App
# --------------------------------------------------

app = FastAPI(
    title="Microdata Reader",
    description=(
        "Extracts HTML Microdata items (itemscope, itemtype, itemprop, "
        "itemref, itemid) from raw HTML or fetched pages."
    ),
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --------------------------------------------------
# Routers
# --------------------------------------------------

app.include_router(
    extract_router,
    prefix="/api",
    tags=["Extract"]
)

# --------------------------------------------------
# Health check
# --------------------------------------------------

@app.get("/health")
def health():
    return {
        "status": "ok",
        "service": "microdata-reader"
    }
