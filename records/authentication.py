"""
Token authentication for the API.

Clients send ``Authorization: Bearer <access token>`` where the token is
the JWT returned by the patient/hospital login endpoints.  Keeping the
class in its own module lets DRF import it from settings without pulling
in any views, which avoids circular imports during start-up.
"""
from __future__ import annotations

from rest_framework_simplejwt.authentication import JWTAuthentication


class BearerJWTAuthentication(JWTAuthentication):
    """JWT authentication using the ``Bearer`` keyword.

    SimpleJWT already reads ``SIMPLE_JWT['AUTH_HEADER_TYPES']``; this
    subclass gives the project a stable import path and a place for
    later customisation.
    """

    www_authenticate_realm = 'medsys'
