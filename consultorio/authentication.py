"""
Token authentication for the API.

``POST /login`` hands out a DRF token.  Requests may send it as
``Authorization: Token <key>`` so the caller is identified; no endpoint
requires it.  Keeping the class in its own module avoids circular
imports when the REST framework loads authentication classes.
"""
from __future__ import annotations

from rest_framework import authentication


class TokenAuthentication(authentication.TokenAuthentication):
    """DRF token authentication with a stable import path for settings."""

    keyword = 'Token'
