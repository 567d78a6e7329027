import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from banking_api.api.endpoints import router
from banking_api.core.config import settings
from banking_api.core.logging import setup_logging
from banking_api.exceptions import LedgerError
from banking_api.services.ledger import Ledger

logger = logging.getLogger(__name__)

async def ledger_error_handler(request: Request, exc: LedgerError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Rejected malformed request to {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())}
    )

async def internal_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal Server Error"}
    )

def create_app(ledger: Optional[Ledger] = None) -> FastAPI:
    """
    Builds the API around a ledger instance; a fresh one is created if none is given.
    """
    setup_logging()

    app = FastAPI(title=settings.PROJECT_NAME)
    app.state.ledger = ledger if ledger is not None else Ledger()

    app.add_exception_handler(LedgerError, ledger_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, internal_error_handler)

    app.include_router(router, prefix=settings.API_PREFIX)

    @app.get("/health")
    def health_check():
        return {"status": "healthy"}

    return app

app = create_app()

def run():
    uvicorn.run("banking_api.main:app", host=settings.HOST, port=settings.PORT)

if __name__ == "__main__":
    run()
