"""HouseHub – FastAPI application."""
# Load .env before any app code that might read config
from dotenv import load_dotenv
from pathlib import Path
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, OperationalError

from househub.config import get_settings
from househub.database import Base, SessionLocal, engine
# Import models so Base.metadata has all tables before create_all (schema source of truth)
from househub.models import (  # noqa: F401
    User, Property, Reservation, Companion, ReservationApproval, Task,
    InventoryItem, DefaultStaple, CustomStaple, Recommendation,
    GuestBookEntry, GuestBookPhoto, WalkthroughSection, WalkthroughStep,
    Contact, CleaningTask, CleaningVisit, CleaningVisitTask, CleaningIssue,
)
from househub.routers import (
    auth, users, properties, reservations, tasks, inventory,
    recommendations, guest_book, walkthrough, dashboard,
    contacts, cleaning,
)
from househub.seed import seed_default_staples
from househub.services.notifications import mail_configured
from househub.services.resilience import default_policy

log = logging.getLogger("uvicorn.error")

settings = get_settings()
app = FastAPI(title=settings.app_name, debug=settings.debug)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(users.router)
app.include_router(properties.router)
app.include_router(reservations.router)
app.include_router(tasks.router)
app.include_router(inventory.router)
app.include_router(recommendations.router)
app.include_router(guest_book.router)
app.include_router(walkthrough.router)
app.include_router(dashboard.router)
app.include_router(contacts.router)
app.include_router(cleaning.router)


@app.exception_handler(IntegrityError)
def integrity_error(request: Request, exc: IntegrityError):
    log.warning("[DB] Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(status_code=409, content={"detail": "Conflicts with an existing record"})


def setup_database() -> None:
    """Create tables and seed default staples. Safe to run repeatedly."""
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed_default_staples(db)
    finally:
        db.close()


@app.on_event("startup")
def startup():
    if mail_configured(settings):
        log.info("[Mailgun] App using domain=%s from=%s", settings.mailgun_domain, settings.mailgun_from_email)
    elif settings.invite_simulate_when_unconfigured:
        log.info("[Mailgun] Not configured - guest invitations are simulated; set MAILGUN_API_KEY and MAILGUN_DOMAIN in .env")
    else:
        log.info("[Mailgun] Not configured - emails will be skipped; set MAILGUN_API_KEY and MAILGUN_DOMAIN in .env")
    # The database may still be coming up alongside the app
    default_policy(retry_on=(OperationalError,)).call(setup_database, label="database setup")


@app.on_event("shutdown")
def shutdown():
    engine.dispose()


@app.get("/")
def root():
    return {"app": settings.app_name, "status": "ok"}


@app.get("/health")
def health():
    return {"status": "healthy"}
