from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from app.core.config import settings
from app.core.db import Base, engine
from app.core.errors import register_exception_handlers
from app.core.logging import setup_logging
from app.api import products, users

# Import models so Base.metadata knows them
import app.models  # noqa

setup_logging(settings.LOG_LEVEL)

app = FastAPI(title="Storefront Catalog Backend")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
    max_age=600,
)
# flash messages ride in this signed cookie, one request cycle at a time
app.add_middleware(SessionMiddleware, secret_key=settings.SESSION_SECRET)

register_exception_handlers(app)

# Create tables (no migrations; schema follows the models)
Base.metadata.create_all(bind=engine)

app.include_router(products.router)
app.include_router(users.router)


@app.get("/")
def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000)
