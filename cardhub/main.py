"""
FastAPI Application Entry Point
Main application setup and route registration
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cardhub import __version__
from cardhub.config import settings
from cardhub.database import connect_db, disconnect_db
from cardhub.exceptions import CardHubError
from cardhub.routes import id_cards, verification

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="ID card rendering and QR verification for schools",
    version=__version__,
    debug=settings.DEBUG
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(CardHubError)
async def cardhub_error_handler(request: Request, exc: CardHubError):
    """Render engine errors as JSON with their own status code"""
    if exc.http_status >= 500:
        logger.error("%s on %s %s: %s", exc.code, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.http_status, content=exc.to_dict())


# Startup event
@app.on_event("startup")
async def startup():
    """Run on application startup"""
    await connect_db()
    print(f"[START] {settings.APP_NAME} started in {settings.APP_ENV} mode")


# Shutdown event
@app.on_event("shutdown")
async def shutdown():
    """Run on application shutdown"""
    await disconnect_db()


# Health check endpoint
@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": __version__
    }


app.include_router(id_cards.router, prefix="/id-cards", tags=["ID Cards"])
app.include_router(verification.router, prefix="/verify", tags=["Verification"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "cardhub.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
