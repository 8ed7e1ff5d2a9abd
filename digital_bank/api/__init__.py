"""
Digital Bank API Application Factory
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from .customers import router as customers_router
from .transactions import router as transactions_router
from .. import __version__
from ..config import get_config
from ..logging_config import setup_logging


def create_app() -> FastAPI:
    """Create and configure the FastAPI application"""
    config = get_config()
    setup_logging(level=config.log_level, log_format=config.log_format)

    app = FastAPI(
        title="Digital Bank API",
        description="In-memory customer registry with deposits, withdrawals and transfers",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(customers_router, prefix="/customers", tags=["Customers"])
    app.include_router(transactions_router, tags=["Transactions"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "digital_bank_api",
            "version": __version__
        }

    @app.get("/")
    async def get_api_info():
        """Get API information"""
        return {
            "name": "Digital Bank API",
            "version": __version__,
            "endpoints": {
                "docs": "/docs",
                "health": "/health",
                "customers": "/customers",
                "deposit": "/customers/{customer_id}/deposit",
                "withdraw": "/customers/{customer_id}/withdraw",
                "transfers": "/transfers"
            }
        }

    return app


app = create_app()


def run_server(host: str = None, port: int = None, reload: bool = False):
    """Run the FastAPI server"""
    config = get_config()
    uvicorn.run(
        "digital_bank.api:app",
        host=host or config.api_host,
        port=port or config.api_port,
        reload=reload,
        log_level=config.log_level.lower()
    )
