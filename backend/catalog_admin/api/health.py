from catalog_admin.adapters.media import get_media_adapter
from catalog_admin.db import engine
from fastapi import APIRouter
from sqlalchemy import text

router = APIRouter()


@router.get("/health", tags=["health"])
def health():
    db_ok = False
    media_ok = False
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            db_ok = True
    except Exception:
        db_ok = False
    try:
        media_ok = get_media_adapter().health_check()
    except Exception:
        media_ok = False

    return {
        "status": "ok" if db_ok and media_ok else "degraded",
        "db": db_ok,
        "media_adapter": media_ok,
    }
