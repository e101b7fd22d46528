"""
Trial abuse policy constants and email helpers.
"""

import hashlib
from datetime import timedelta

from .base import normalize_email

TRIAL_DURATION_DAYS = 14

# Per-domain rate limit: at most this many trials per window
DOMAIN_TRIAL_LIMIT = 3
DOMAIN_TRIAL_WINDOW = timedelta(days=30)

DISPOSABLE_EMAIL_DOMAINS = frozenset(
    {
        "tempmail.com",
        "guerrillamail.com",
        "10minutemail.com",
        "throwaway.email",
        "temp-mail.org",
        "fakeinbox.com",
        "mailinator.com",
        "maildrop.cc",
        "trashmail.com",
        "yopmail.com",
        "getnada.com",
        "emailondeck.com",
    }
)

REASON_INVALID_EMAIL = "A valid email address is required to start a trial."
REASON_DISPOSABLE = (
    "Disposable email domains ({domain}) are not eligible for a free trial. "
    "Please sign up with your work email."
)
REASON_ALREADY_USED = "This email has already been used for a free trial."
REASON_DOMAIN_LIMIT = (
    "Too many trials have been started from {domain} recently. "
    "Please contact sales to extend your evaluation."
)
REASON_SYSTEM_ERROR = "Unable to verify trial eligibility. Please try again."


def extract_email_domain(email: str) -> str:
    _, sep, domain = normalize_email(email).rpartition("@")
    if not sep:
        return ""
    return domain


def is_disposable_email(email: str) -> bool:
    return extract_email_domain(email) in DISPOSABLE_EMAIL_DOMAINS


def hash_email(email: str) -> str:
    return hashlib.sha256(normalize_email(email).encode("utf-8")).hexdigest()
