import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

load_dotenv()

from quantdesk.api.dependencies import get_settings

settings = get_settings()

# Configure file + console logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[
        logging.FileHandler(settings.log_file, mode="a"),
        logging.StreamHandler(),
    ],
)
logger = logging.getLogger(__name__)

from quantdesk.api.routes import router
from quantdesk.errors import EngineInputError
from quantdesk.services.operations import format_validation_error

app = FastAPI(title="Quantdesk Calculation Engines", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


@app.exception_handler(EngineInputError)
async def engine_input_error_handler(request: Request, exc: EngineInputError):
    logger.warning(f"{request.url.path}: {exc}")
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    parts = [
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
    ]
    message = "Invalid request: " + "; ".join(parts)
    logger.warning(f"{request.url.path}: {message}")
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    message = format_validation_error(exc)
    logger.warning(f"{request.url.path}: {message}")
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.url.path}")
    return JSONResponse(status_code=500, content={"error": str(exc) or "Internal server error"})


logger.info("Quantdesk calculation engines started")


@app.get("/")
async def root():
    return {"message": "Quantdesk Calculation Engines API", "docs": "/docs"}
