from __future__ import annotations

import secrets
import string

# The state parameter sent to /authorize.  It is echoed back by the provider
# on /callback but never compared: the login flow does no CSRF-state check.

STATE_LENGTH = 13
_STATE_ALPHABET = string.ascii_lowercase + string.digits


def generate_state(length: int = STATE_LENGTH) -> str:
    return "".join(secrets.choice(_STATE_ALPHABET) for _ in range(length))
