import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import LOG_LEVEL
from .services.backend import BackendClient
from .services.database import build_engine, create_db_and_tables
from .services.storage import S3Storage
from .routers import auth, location, setup_admin, submissions

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

origins = ["*"]

def create_app(backend: Optional[BackendClient] = None) -> FastAPI:
    app = FastAPI(title="VersoForms")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.backend = backend or BackendClient(build_engine(), S3Storage())

    @app.get("/")
    async def root():
        return {"message": "VersoForms API"}

    app.include_router(submissions.router)
    app.include_router(auth.router)
    app.include_router(location.router)
    app.include_router(setup_admin.router)

    @app.on_event("startup")
    def on_startup():
        create_db_and_tables(app.state.backend.engine)

    return app

app = create_app()
