import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.profile.router import router as profile_router
from config import get_settings
from profile_store import ensure_indexes

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    ensure_indexes()
    logger.info("Profile indexes ensured")
    yield


app = FastAPI(title="Developer Profile API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[],              # keep empty when using regex
    allow_origin_regex=".*",       # matches any origin
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _format_validation_error(error: dict) -> dict:
    loc = error.get("loc", ())
    formatted = {
        "msg": error.get("msg", "Invalid value"),
        "param": str(loc[-1]) if len(loc) > 1 else "",
        "location": str(loc[0]) if loc else "body",
    }
    if "input" in error:
        formatted["value"] = error["input"]
    return formatted


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [_format_validation_error(error) for error in exc.errors()]
    logger.info("Validation failed path=%s errors=%s", request.url.path, [e["msg"] for e in errors])
    return JSONResponse(status_code=400, content=jsonable_encoder({"errors": errors}))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"msg": str(exc.detail)})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error path=%s", request.url.path)
    return JSONResponse(status_code=500, content={"msg": "Server Error"})


app.include_router(profile_router)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
