# teamcore/main.py

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import logging

from teamcore.core.exceptions import (
    InvariantViolation,
    NotFoundError,
    ProvisioningExhausted,
    ValidationError,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("uvicorn.error")

app = FastAPI(
    title="Teamcore API",
    version="1.0.0",
    description="Team provisioning and governance",
)


@app.get("/health", tags=["Health"])
def health():
    return {"ok": True}


@app.on_event("startup")
async def startup_event():
    logger.info("Starting Teamcore API")


# Errors are reported to the initiating request as {"detail": message}

@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(InvariantViolation)
async def invariant_violation_handler(request: Request, exc: InvariantViolation):
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.exception_handler(ProvisioningExhausted)
async def provisioning_exhausted_handler(request: Request, exc: ProvisioningExhausted):
    logger.error(f"Subdomain provisioning exhausted: {exc}")
    return JSONResponse(status_code=409, content={"detail": str(exc)})


if __name__ == "__main__":
    import os
    import uvicorn
    uvicorn.run(
        "teamcore.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8000)),
        reload=bool(os.getenv("DEBUG", False))
    )
