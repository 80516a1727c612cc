"""Outbound email (Mailgun over httpx) and the messages the app sends."""
from __future__ import annotations

import logging

import httpx

from househub.config import Settings, get_settings
from househub.services.resilience import RetryPolicy, TransientError, default_policy

log = logging.getLogger("uvicorn.error")

MAILGUN_US_BASE = "https://api.mailgun.net"


def mail_configured(settings: Settings | None = None) -> bool:
    settings = settings or get_settings()
    return bool(settings.mailgun_api_key and settings.mailgun_domain)


def send_email(
    to_email: str,
    subject: str,
    html_content: str,
    text_content: str | None = None,
    policy: RetryPolicy | None = None,
) -> bool:
    """Send email via Mailgun. Returns True when the provider accepted it; never raises."""
    settings = get_settings()
    if not mail_configured(settings):
        log.info("[Email] NOT SENT (Mailgun not configured): to=%s subject=%s", to_email, subject)
        return False
    policy = policy or default_policy()
    try:
        return policy.call(
            lambda: _send_email_mailgun(to_email, subject, html_content, text_content, settings, policy.timeout_seconds),
            label=f"mailgun to={to_email}",
        )
    except TransientError:
        return False
    except httpx.HTTPError as e:
        log.warning("[Mailgun] Exception: to=%s error=%s: %s", to_email, type(e).__name__, e)
        return False


def _send_email_mailgun(
    to_email: str,
    subject: str,
    html_content: str,
    text_content: str | None,
    settings: Settings,
    timeout: float,
) -> bool:
    base = (settings.mailgun_base_url or MAILGUN_US_BASE).strip().rstrip("/")
    domain = settings.mailgun_domain.strip().lower()
    from_addr = settings.mailgun_from_email
    from_domain = from_addr.split("@")[-1].lower() if "@" in from_addr else ""
    if domain and from_domain != domain:
        # Mailgun rejects senders outside the sending domain
        from_addr = f"noreply@{domain}"
    data = {
        "from": f"{settings.mailgun_from_name} <{from_addr}>",
        "to": to_email,
        "subject": subject,
        "text": text_content or "",
        "html": html_content or "",
    }
    try:
        with httpx.Client(timeout=timeout) as client:
            r = client.post(f"{base}/v3/{domain}/messages", auth=("api", settings.mailgun_api_key), data=data)
    except httpx.TransportError as e:
        raise TransientError(f"{type(e).__name__}: {e}") from e
    if 200 <= r.status_code < 300:
        log.info("[Mailgun] API success: to=%s status=%s", to_email, r.status_code)
        return True
    if r.status_code == 429 or r.status_code >= 500:
        raise TransientError(f"status={r.status_code}")
    log.warning("[Mailgun] API failed: status=%s to=%s body=%s", r.status_code, to_email, r.text[:500])
    return False


def send_guest_invitation(email: str, name: str, reservation_id: int, *, property_name: str | None = None,
                          start: str | None = None, end: str | None = None) -> bool:
    """Invite a reservation companion to the portal. Logged as a simulated send when mail is not configured."""
    settings = get_settings()
    if not mail_configured(settings) and settings.invite_simulate_when_unconfigured:
        log.info("[Invite] Simulated invitation to %s <%s> for reservation %s", name, email, reservation_id)
        return True
    place = property_name or "the house"
    when = f" from {start} to {end}" if start and end else ""
    subject = f"[{settings.app_name}] You're invited to {place}"
    text = (
        f"Hi {name}, you have been added as a companion on a stay at {place}{when}. "
        f"Create your account at {settings.public_app_url} to see trip details."
    )
    html = f"""
    <p>Hi {name},</p>
    <p>You have been added as a companion on a stay at <strong>{place}</strong>{when}.</p>
    <p><a href="{settings.public_app_url}">Create your account</a> to see the trip details, house manual and recommendations.</p>
    <p>— {settings.app_name}</p>
    """
    return send_email(email, subject, html, text_content=text)


def send_reservation_request_email(to_email: str, requester: str, title: str, start: str, end: str) -> bool:
    """Tell an approver that a reservation is waiting for review."""
    settings = get_settings()
    subject = f"[{settings.app_name}] Reservation awaiting approval: {title}"
    text = f"{requester} requested '{title}' from {start} to {end}. Review it at {settings.public_app_url}."
    html = f"""
    <p>{requester} requested <strong>{title}</strong> from {start} to {end}.</p>
    <p><a href="{settings.public_app_url}">Review the request</a></p>
    """
    return send_email(to_email, subject, html, text_content=text)


def send_guest_book_notification(to_email: str, property_name: str, guest_name: str, *,
                                  rating: int | None = None, visit_date: str | None = None,
                                  message: str = "") -> bool:
    """Tell a property's owner that a guest book entry is waiting for approval."""
    settings = get_settings()
    subject = f"New Guest Book Entry for {property_name}"
    stars = f"{rating}/5" if rating else "not rated"
    visited = f" (visit on {visit_date})" if visit_date else ""
    excerpt = message if len(message) <= 300 else message[:297] + "..."
    text = (
        f"{guest_name}{visited} left a guest book entry for {property_name}. Rating: {stars}.\n\n"
        f"{excerpt}\n\nPlease review and approve this entry in your dashboard: {settings.public_app_url}"
    )
    html = f"""
    <p><strong>{guest_name}</strong>{visited} left a guest book entry for <strong>{property_name}</strong>.</p>
    <p>Rating: {stars}</p>
    <blockquote>{excerpt}</blockquote>
    <p>Please review and approve this entry in your <a href="{settings.public_app_url}">dashboard</a>.</p>
    """
    return send_email(to_email, subject, html, text_content=text)
