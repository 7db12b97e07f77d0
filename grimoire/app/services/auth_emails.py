"""
Messages sent by the verification and password reset flows.

The links carry the raw one-time token and nothing else.
"""

from datetime import timedelta
from html import escape
from typing import Optional
from urllib.parse import urlencode

from pydantic import BaseModel


class OutgoingEmail(BaseModel):
    subject: str
    html_body: str


def _greeting(display_name: Optional[str]) -> str:
    return f"Hi {escape(display_name)}" if display_name else "Hi there"


def _hours(ttl: timedelta) -> str:
    hours = int(ttl.total_seconds() // 3600)
    return "1 hour" if hours == 1 else f"{hours} hours"


def _link(frontend_url: str, path: str, raw_token: str) -> str:
    return f"{frontend_url.rstrip('/')}{path}?{urlencode({'token': raw_token})}"


def verification_email(
    frontend_url: str, raw_token: str, ttl: timedelta, display_name: Optional[str] = None
) -> OutgoingEmail:
    url = escape(_link(frontend_url, "/verify-email", raw_token))
    html_body = f"""
        <html>
            <body>
                <h2>Welcome to GRIMOIRE!</h2>
                <p>{_greeting(display_name)},</p>
                <p>Please verify your email address:</p>
                <p><a href="{url}">Verify Email Address</a></p>
                <p>This link will expire in {_hours(ttl)}.</p>
                <p>If you didn't create a GRIMOIRE account, you can safely ignore this email.</p>
            </body>
        </html>
    """
    return OutgoingEmail(subject="Verify your GRIMOIRE account", html_body=html_body)


def password_reset_email(
    frontend_url: str, raw_token: str, ttl: timedelta, display_name: Optional[str] = None
) -> OutgoingEmail:
    url = escape(_link(frontend_url, "/reset-password", raw_token))
    html_body = f"""
        <html>
            <body>
                <h2>Password Reset Request</h2>
                <p>{_greeting(display_name)},</p>
                <p>We received a request to reset your GRIMOIRE password:</p>
                <p><a href="{url}">Reset Password</a></p>
                <p>This link will expire in {_hours(ttl)}.</p>
                <p>If you didn't request a password reset, please ignore this email.
                Your password will remain unchanged.</p>
            </body>
        </html>
    """
    return OutgoingEmail(subject="Reset your GRIMOIRE password", html_body=html_body)
