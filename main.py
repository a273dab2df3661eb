import os
import importlib
import logging
from datetime import datetime
from fastapi import FastAPI, APIRouter, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from alembic.config import Config
from alembic import command

from core.config import settings
from core.exceptions import WorkflowError

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# The directory where all application folders are located
APPS_DIRECTORY = "apps"
API_PREFIX = "/api/v1"
BASE_DIR = os.path.dirname(os.path.abspath(__file__))


# --- Database Migration Function ---
def run_migrations():
    """Programmatically runs Alembic migrations."""
    logger.info("Running database migrations...")
    alembic_cfg = Config(os.path.join(BASE_DIR, "alembic.ini"))
    alembic_cfg.set_main_option("script_location", os.path.join(BASE_DIR, "alembic"))
    alembic_cfg.attributes["configure_logger"] = False
    command.upgrade(alembic_cfg, "head")
    logger.info("Migrations complete.")


# Initialize the main FastAPI application
app = FastAPI(
    title="Scaleworks Job Workflow API",
    description="Scale repair and calibration job tracking.",
    version="1.0.0",
)

# --- CORS Middleware ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Error envelope ---
@app.exception_handler(WorkflowError)
async def workflow_error_handler(request: Request, exc: WorkflowError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "code": exc.code, "message": exc.message},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
    message = f"{field}: {first.get('msg')}" if field else "Invalid request"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "code": "VALIDATION_ERROR", "message": message},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.get("/health", tags=["Health"])
def health_check():
    return {"status": "healthy", "timestamp": datetime.utcnow().isoformat()}


# --- Dynamic App Discovery and Router Inclusion ---
def discover_apps(application: FastAPI):
    """
    Mount ``apps/<name>/router.py`` under ``/api/v1/<name>``.

    Underscores in the directory name become hyphens. A router module may set
    ``ROUTE_PREFIX`` to mount elsewhere. Apps load alphabetically so that
    ``jobs/inspections`` is registered before ``jobs/{job_id}``.
    """
    apps_path = os.path.join(BASE_DIR, APPS_DIRECTORY)
    logger.debug(f"Searching for apps in: {apps_path}")

    for item_name in sorted(os.listdir(apps_path)):
        app_dir = os.path.join(apps_path, item_name)
        if not os.path.isdir(app_dir) or item_name.startswith(('_', '.')):
            continue

        # Import the models from each app to ensure Alembic can detect them
        if os.path.isfile(os.path.join(app_dir, "models.py")):
            importlib.import_module(f"{APPS_DIRECTORY}.{item_name}.models")

        if not os.path.isfile(os.path.join(app_dir, "router.py")):
            continue
        module_name = f"{APPS_DIRECTORY}.{item_name}.router"
        router_module = importlib.import_module(module_name)
        router_instance = getattr(router_module, "router", None)

        if router_instance and isinstance(router_instance, APIRouter):
            route_prefix = getattr(router_module, "ROUTE_PREFIX", item_name.replace("_", "-"))
            application.include_router(
                router_instance,
                prefix=f"{API_PREFIX}/{route_prefix}",
                tags=[item_name.replace("_", " ").capitalize()]
            )
            logger.debug(f"Loaded router from '{item_name}' at {API_PREFIX}/{route_prefix}")
        else:
            logger.warning(f"Could not find a valid APIRouter named 'router' in '{module_name}'.")


discover_apps(app)


# --- Startup Event Handler ---
@app.on_event("startup")
def startup_event():
    """Run database migrations on application startup."""
    if settings.RUN_MIGRATIONS_ON_STARTUP:
        run_migrations()
    logger.info("Application is ready to serve requests.")
