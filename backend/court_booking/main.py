import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from court_booking import settings
from court_booking.database import init_db
from court_booking.routes import courts, maintenance, reservations

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Court Booking API")

_cors_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
_cors_origins.extend(settings.CORS_ORIGINS)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(courts.router, prefix="/api", tags=["courts"])
app.include_router(reservations.router, prefix="/api", tags=["reservations"])
app.include_router(maintenance.router, prefix="/api", tags=["maintenance"])


@app.on_event("startup")
def on_startup():
    init_db()
    logger.info(
        "Court Booking API started (operating hours %s-%s, completed maintenance blocks: %s)",
        settings.OPENING_TIME,
        settings.CLOSING_TIME,
        settings.COMPLETED_MAINTENANCE_BLOCKS,
    )


@app.get("/api/health")
def health_check():
    return {"app_name": "Court Booking API", "status": "healthy"}
