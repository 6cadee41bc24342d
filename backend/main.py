from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from config import get_settings
from models import HealthResponse
from routes.reports import router as reports_router
from routes.routing import router as routing_router
from services.errors import InvalidRequest, SkateScoutError
from services.maps_client import close_maps_client
from services.report_store import ReportStore, get_report_store, report_store

settings = get_settings()

# Setup logging
logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

# FastAPI app
app = FastAPI(title="Skate Scout Routes API", version="1.0.0")

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(routing_router)
app.include_router(reports_router)


@app.exception_handler(SkateScoutError)
async def skate_scout_error_handler(request: Request, exc: SkateScoutError):
    return JSONResponse(status_code=exc.status_code, content=exc.response_content())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    fields = [".".join(str(part) for part in error["loc"] if part != "body") for error in exc.errors()]
    logger.warning(f"Rejected {request.method} {request.url.path}: invalid {', '.join(fields)}")
    return JSONResponse(status_code=400, content={"error": InvalidRequest.public_message, "fields": fields})


# Root endpoint
@app.get("/")
async def root():
    return {"message": "Skate Scout Routes API is running", "status": "healthy", "version": "1.0.0"}


@app.get("/api/health", response_model=HealthResponse)
async def health_check(store: ReportStore = Depends(get_report_store)):
    """Service status and number of active reports"""
    return HealthResponse(status="ok", message="Server is running", reports=store.count())


@app.on_event("startup")
async def startup_event():
    report_store.clear()
    logger.info("=" * 70)
    logger.info("Skate Scout Server")
    logger.info("=" * 70)
    logger.info(f"API endpoint: POST http://{settings.host}:{settings.port}/api/routes")
    logger.info(f"Reports endpoint: POST http://{settings.host}:{settings.port}/api/reports")
    logger.info(f"Health check: GET http://{settings.host}:{settings.port}/api/health")
    logger.info("=" * 70)


@app.on_event("shutdown")
async def shutdown_event():
    await close_maps_client()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)
