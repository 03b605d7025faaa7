from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from catalog_admin.api.health import router as health_router
from catalog_admin.api.routes_admin import router as admin_router
from catalog_admin.api.routes_catalogue import router as catalogue_router
from catalog_admin.api.routes_media import router as media_router
from catalog_admin.api.routes_reference import router as reference_router
from catalog_admin.config import settings
from catalog_admin.db import init_db


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup; RESET_DB=1 drops and recreates the tables
    init_db()
    yield


app = FastAPI(title="Catalog Admin - Backend", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router, prefix="/api", tags=["health"])

app.include_router(catalogue_router, prefix="/api/products", tags=["catalogue"])

app.include_router(reference_router, tags=["reference"])

app.include_router(admin_router, tags=["admin"])

app.include_router(media_router, tags=["media"])
