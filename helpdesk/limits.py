"""Rate limiting (slowapi) shared by the app and the routers."""

from __future__ import annotations

import os

from slowapi import Limiter
from slowapi.util import get_remote_address

LOGIN_RATE_LIMIT = os.getenv("LOGIN_RATE_LIMIT", "5/minute")

limiter = Limiter(key_func=get_remote_address)

__all__ = ["LOGIN_RATE_LIMIT", "limiter"]
