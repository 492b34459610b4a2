"""
KMC Manager backend: inventory and billing for a single pharmacy counter.

ARCHITECTURE:
- One AppState document (medicines, suppliers, customers, bills, session)
  persisted as a single blob through the storage gateway
- StateStore owns that document; routers ask it to replace whole fields
- Checkout engine builds the cart and commits a sale as one step

Single user. Every request is served against the same state.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pharmacy_pos.api.routes import auth, billing, customers, medicines, reports, suppliers
from pharmacy_pos.api.routes import settings as settings_routes
from pharmacy_pos.core.config import settings
from pharmacy_pos.core.exceptions import BusinessError, NotFoundError, ValidationError
from pharmacy_pos.db.init_db import init_db


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the storage table before the first request."""
    try:
        print("[*] Initializing database...")
        init_db()
        print("[OK] Database initialized")
    except Exception as e:
        print(f"[ERROR] Startup error: {e}")
        raise
    yield


app = FastAPI(
    title="KMC Manager API",
    description="Khan Medical Complex inventory & billing management.",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Accept", "Origin"],
    max_age=600,
)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    error = BusinessError.bad_request(exc.message, exc.limit)
    return JSONResponse(status_code=error.status_code, content={"detail": error.detail})


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    error = BusinessError.not_found(exc.resource, reason=exc.identifier)
    return JSONResponse(status_code=error.status_code, content={"detail": error.detail})


app.include_router(auth.router, prefix="/auth", tags=["auth"])
app.include_router(medicines.router, prefix="/medicines", tags=["medicines"])
app.include_router(suppliers.router, prefix="/suppliers", tags=["suppliers"])
app.include_router(customers.router, prefix="/customers", tags=["customers"])
app.include_router(billing.router, prefix="/billing", tags=["billing"])
app.include_router(reports.router, prefix="/reports", tags=["reports"])
app.include_router(settings_routes.router, prefix="/settings", tags=["settings"])


@app.get("/health")
def health():
    return {"status": "ok"}
