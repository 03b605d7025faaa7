import os
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base
from catalog_admin.config import settings
from catalog_admin.utils.logs import get_logger

log = get_logger("db", "DB")

DATABASE_URL = settings.DATABASE_URL
_is_sqlite = DATABASE_URL.startswith("sqlite")

engine = create_engine(
    DATABASE_URL,
    future=True,
    echo=False,
    # TestClient and the API threadpool share the file-backed SQLite pool
    connect_args={"check_same_thread": False} if _is_sqlite else {},
)
SessionLocal = sessionmaker(autoflush=False, bind=engine)
Base = declarative_base()


if _is_sqlite:

    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        # SQLite ignores ON DELETE CASCADE and FK checks unless asked per connection
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# Reference rows every fresh install gets (admin form needs at least one category)
DEFAULT_REFERENCE_DATA = {
    "categories": [
        {
            "name": "Electronics",
            "slug": "electronics",
            "subcategories": [
                {"name": "Smartphones", "slug": "smartphones"},
                {"name": "Laptops", "slug": "laptops"},
            ],
        },
        {
            "name": "Fashion",
            "slug": "fashion",
            "subcategories": [{"name": "Footwear", "slug": "footwear"}],
        },
    ],
    "brands": [
        {"name": "Apple", "slug": "apple"},
        {"name": "Samsung", "slug": "samsung"},
    ],
}


def init_db(reset: bool = None):
    """
    Initialize DB schema.

    Behavior:
      - If `reset` is true (or RESET_DB env var is 1/true/yes when `reset` is None),
        drop & recreate tables.
      - Otherwise, leave existing tables in place.
      - When SEED_REFERENCE_DATA is on, make sure the default categories and
        brands exist (idempotent).

    Ensure all model modules are imported so metadata is populated.
    """
    import importlib

    if reset is None:
        reset = os.environ.get("RESET_DB", "false").lower() in ("1", "true", "yes")

    # List of model modules we expect to import here (add new modules here)
    model_modules = [
        "catalog_admin.models.category",
        "catalog_admin.models.product",
        "catalog_admin.models.variant_type",
        "catalog_admin.models.color_variant",
        "catalog_admin.models.product_variant",
    ]
    for mod in model_modules:
        importlib.import_module(mod)

    if reset:
        log.info("Resetting database (dropping all tables)...")
        Base.metadata.drop_all(bind=engine)

    Base.metadata.create_all(bind=engine)
    log.info("Database initialized.")

    if settings.SEED_REFERENCE_DATA:
        from catalog_admin.repositories.reference_repo import ReferenceRepository

        with SessionLocal() as s:
            created = ReferenceRepository(s).ensure_reference_data(
                DEFAULT_REFERENCE_DATA
            )
            s.commit()
        if created:
            log.info(f"Seeded {created} missing reference rows.")


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
