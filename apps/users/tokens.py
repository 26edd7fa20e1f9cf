"""JWT helpers carrying capability scopes."""

from __future__ import annotations

from typing import Iterable

from rest_framework_simplejwt.tokens import AccessToken  # type: ignore

from .capabilities import SCOPES_CLAIM


def scoped_access_token(user, scopes: Iterable[str]) -> AccessToken:  # type: ignore
    """Access token for ``user`` limited to ``scopes`` (``"*"`` for all)."""
    token = AccessToken.for_user(user)
    token[SCOPES_CLAIM] = list(scopes)
    return token
