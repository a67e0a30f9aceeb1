"""Mini README: Inbound payload validation for MyWallet.

Each route validates its body against one of the named schemas, then runs
the sanitizer over the result. The bearer-token shape check lives here too
because a malformed header is a validation failure, not an auth failure.
"""

from .schemas import (
    SCHEMAS,
    EntryCreateRequest,
    EntryUpdateRequest,
    LoginRequest,
    SignUpRequest,
    format_errors,
    parse_bearer_token,
    sanitize_payload,
    validate_payload,
)

__all__ = [
    "SCHEMAS",
    "EntryCreateRequest",
    "EntryUpdateRequest",
    "LoginRequest",
    "SignUpRequest",
    "format_errors",
    "parse_bearer_token",
    "sanitize_payload",
    "validate_payload",
]
