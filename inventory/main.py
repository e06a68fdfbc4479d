"""
Module principal de l'application FastAPI de gestion de stock.

Configure le logging, le CORS, la création des tables au démarrage et inclut
les routeurs (catégories, produits, alertes de stock, mouvements de stock).
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from inventory.config import settings
from inventory.database import create_tables

from inventory.categories.router import router as categories_router
from inventory.products.router import router as products_router
from inventory.stock.router import router as stock_router
from inventory.stock_movements.router import router as stock_movements_router

# Configurer le logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await create_tables()
    logger.info("Tables vérifiées, application prête.")
    yield


app = FastAPI(
    title=settings.APP_NAME,
    description="API de gestion de stock: produits, catégories, entrées/sorties et alertes de stock bas.",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ======================================================
# Inclure les routeurs
# ======================================================
API_PREFIX = settings.API_V1_PREFIX

app.include_router(categories_router, prefix=f"{API_PREFIX}/categories", tags=["Categories"])
app.include_router(products_router, prefix=f"{API_PREFIX}/products", tags=["Produits"])
app.include_router(stock_router, prefix=f"{API_PREFIX}/stock", tags=["Stock"])
app.include_router(stock_movements_router, prefix=f"{API_PREFIX}/stock-movements", tags=["Stock Movements"])
