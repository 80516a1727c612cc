"""Companion invitations for a reservation.

Eligible companions: flagged invited_to_system, have an email, and were never
invited (invite_sent_at is NULL). Sends run concurrently in a thread pool on
plain InviteRequest values; only the request's session touches the database,
so stamping invite_sent_at happens back on the calling thread. A failed send
is logged and leaves that companion eligible for a later call; it never stops
the others.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

from sqlalchemy.orm import Session

from househub.config import get_settings
from househub.models.property import Property
from househub.models.reservation import Companion, Reservation
from househub.services.notifications import send_guest_invitation

log = logging.getLogger("uvicorn.error")


@dataclass(frozen=True)
class InviteRequest:
    companion_id: int
    email: str
    name: str
    reservation_id: int
    property_name: str | None
    start: str
    end: str


Sender = Callable[[InviteRequest], bool]


def _default_sender(req: InviteRequest) -> bool:
    return send_guest_invitation(
        req.email,
        req.name,
        req.reservation_id,
        property_name=req.property_name,
        start=req.start,
        end=req.end,
    )


def eligible_companions(db: Session, reservation_id: int) -> list[Companion]:
    return (
        db.query(Companion)
        .filter(
            Companion.reservation_id == reservation_id,
            Companion.invited_to_system.is_(True),
            Companion.invite_sent_at.is_(None),
            Companion.email.isnot(None),
            Companion.email != "",
        )
        .all()
    )


def send_guest_invitations(db: Session, reservation_id: int, sender: Sender | None = None) -> int:
    """Invite every eligible companion once. Returns how many invitations went out."""
    reservation = db.query(Reservation).filter(Reservation.id == reservation_id).first()
    if not reservation:
        return 0
    to_invite = eligible_companions(db, reservation_id)
    if not to_invite:
        return 0

    prop = db.query(Property).filter(Property.id == reservation.property_id).first()
    requests = [
        InviteRequest(
            companion_id=c.id,
            email=c.email,
            name=c.name,
            reservation_id=reservation.id,
            property_name=prop.name if prop else None,
            start=reservation.start_date.isoformat(),
            end=reservation.end_date.isoformat(),
        )
        for c in to_invite
    ]
    send = sender or _default_sender
    log.info("[Invite] Sending invitations to %d companion(s) of reservation %s", len(requests), reservation_id)

    def _dispatch(req: InviteRequest) -> bool:
        try:
            return bool(send(req))
        except Exception:
            log.exception("[Invite] Failed to send invitation to %s <%s>", req.name, req.email)
            return False

    workers = max(1, min(get_settings().invite_max_workers, len(requests)))
    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = list(pool.map(_dispatch, requests))

    sent = 0
    now = datetime.now(timezone.utc)
    for companion, ok in zip(to_invite, results):
        if not ok:
            log.warning("[Invite] Invitation to %s not sent; companion stays eligible", companion.name)
            continue
        companion.invite_sent_at = now
        sent += 1
    db.commit()
    log.info("[Invite] %d of %d invitation(s) sent for reservation %s", sent, len(requests), reservation_id)
    return sent
