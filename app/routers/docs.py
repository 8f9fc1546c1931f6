# =============================================================================
# app/routers/docs.py - Landing Page and API Documentation
# =============================================================================
# Serves the bundled OpenAPI document (views/swagger.yaml) through Swagger UI.
# The document is loaded once into the AppContext; these handlers only read it.
# =============================================================================

from fastapi import APIRouter
from fastapi.openapi.docs import get_swagger_ui_html
from fastapi.responses import HTMLResponse, JSONResponse

from app.dependencies import ContextDep

DOCS_PATH = "/api-docs"
DOCS_SPEC_PATH = f"{DOCS_PATH}/swagger.json"

router = APIRouter()


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def root():
    """Landing page linking to the documentation UI."""
    return '<h1>Jobs API</h1><a href="./api-docs">API Docs</a>'


@router.get(DOCS_PATH, response_class=HTMLResponse, include_in_schema=False)
async def swagger_ui(context: ContextDep):
    title = context.swagger_doc.get("info", {}).get("title", "Jobs API")
    return get_swagger_ui_html(
        openapi_url=DOCS_SPEC_PATH,
        title=f"{title} - Docs",
    )


@router.get(DOCS_SPEC_PATH, include_in_schema=False)
async def swagger_document(context: ContextDep):
    return JSONResponse(context.swagger_doc)
