import logging

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from talentsift.api.routes.candidates import router as candidates_router
from talentsift.api.routes.parse import router as parse_router
from talentsift.config import get_settings

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = FastAPI(
    title=f"{settings.app_name} (Resume Screening Service)",
    description="Heuristic resume extraction and candidate scoring from DOCX/PDF/TXT resumes",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

app.include_router(parse_router)
app.include_router(candidates_router)

@app.get("/", tags=["health"])
def root():
    return {"service": "talentsift", "status": "running"}

@app.get("/health", tags=["health"])
def health():
    return {"status": "ok"}

def custom_openapi():
    """Generate OpenAPI schema with custom settings."""
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=f"{settings.app_name} API",
        version="0.1.0",
        description="Resume parsing and candidate scoring API",
        routes=app.routes,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema

app.openapi = custom_openapi
