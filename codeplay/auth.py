"""Principal extraction.

Sign-in and sessions are handled by an upstream auth proxy, which forwards
the signed-in user's identity in ``X-User-*`` request headers.  A request
without ``X-User-Id`` is anonymous.
"""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import ValidationError

from codeplay.playgrounds.models import User, UserRole

USER_ID_HEADER = "x-user-id"
USER_NAME_HEADER = "x-user-name"
USER_EMAIL_HEADER = "x-user-email"
USER_IMAGE_HEADER = "x-user-image"
USER_ROLE_HEADER = "x-user-role"


def principal_from_headers(headers: Mapping[str, str]) -> User | None:
    """Build the current ``User`` from proxy headers, or ``None`` if anonymous.

    Header lookup is case-insensitive.  Unknown roles fall back to ``USER``.
    """
    lowered = {key.lower(): value for key, value in headers.items()}
    user_id = (lowered.get(USER_ID_HEADER) or "").strip()
    if not user_id:
        return None

    try:
        role = UserRole(lowered.get(USER_ROLE_HEADER, UserRole.USER.value).upper())
    except ValueError:
        role = UserRole.USER

    name = (lowered.get(USER_NAME_HEADER) or "").strip() or "Anonymous User"
    email = (lowered.get(USER_EMAIL_HEADER) or "").strip() or f"user-{user_id}@example.com"
    try:
        return User(
            id=user_id,
            name=name,
            email=email,
            image=lowered.get(USER_IMAGE_HEADER) or None,
            role=role,
        )
    except ValidationError:
        return None
