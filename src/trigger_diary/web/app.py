"""FastAPI web application."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .routes import advisor, analysis, records

# Create FastAPI app
app = FastAPI(
    title="Trigger Diary",
    description="Daily health logs with symptom trigger analysis and flare-up prediction",
    version="0.1.0",
)

# Include routers
app.include_router(records.router, tags=["records"])
app.include_router(analysis.router, prefix="/analysis", tags=["analysis"])
app.include_router(advisor.router, prefix="/advisor", tags=["advisor"])


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are a 400 with a flat error message."""
    errors = exc.errors()
    message = "; ".join(
        f"{'.'.join(str(p) for p in err['loc'][1:]) or 'body'}: {err['msg']}"
        for err in errors
    ) or "invalid request"
    return JSONResponse({"error": message}, status_code=400)


@app.get("/ping")
async def ping():
    return {"message": "pong"}


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok"}
