# agrigrow/main.py
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.exc import SQLAlchemyError
import uvicorn

from agrigrow.api import api_router
from agrigrow.data.database import Base, engine
from agrigrow.domain.errors import ShopError, StoreFailure, MissingFields
from agrigrow.utils.logging import get_logger
from agrigrow.utils.settings import PORT

# import every model before create_all
import agrigrow.data.models  # noqa: F401

logger = get_logger(__name__)


def init_db():
    logger.info(f"Initializing database, tables: {list(Base.metadata.tables.keys())}")
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        logger.error(f"Failed to create tables: {e}")
        raise
    logger.info("Database tables ready")


async def shop_error_handler(request: Request, exc: ShopError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.payload())


async def permission_error_handler(request: Request, exc: PermissionError):
    return JSONResponse(status_code=403, content={"message": str(exc)})


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = jsonable_encoder(exc.errors())
    missing = [
        ".".join(str(part) for part in e["loc"][1:]) or str(e["loc"][0])
        for e in errors
        if e.get("type") == "missing"
    ]
    if missing:
        failure = MissingFields(f"Missing required fields: {', '.join(missing)}.")
        return JSONResponse(
            status_code=failure.status_code,
            content={**failure.payload(), "errors": errors},
        )
    return JSONResponse(status_code=422, content={"message": "Invalid request data.", "errors": errors})


async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"{request.method} {request.url.path}: store failure", exc_info=exc)
    failure = StoreFailure("Unexpected store failure.")
    return JSONResponse(status_code=failure.status_code, content=failure.payload())


def create_app() -> FastAPI:
    app = FastAPI(
        title="AgriGrow API",
        version="1.0.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ShopError, shop_error_handler)
    app.add_exception_handler(PermissionError, permission_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)

    app.include_router(api_router)

    @app.get("/")
    def root():
        return {"message": "AgriGrow API is running"}

    return app


init_db()
app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=PORT)
