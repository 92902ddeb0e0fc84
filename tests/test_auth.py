"""Unit tests for proxy-header principal extraction (codeplay.auth)."""

from __future__ import annotations

import pytest

from codeplay.auth import principal_from_headers
from codeplay.playgrounds import UserRole

pytestmark = pytest.mark.unit


class TestPrincipalFromHeaders:
    def test_anonymous_without_id(self):
        assert principal_from_headers({}) is None
        assert principal_from_headers({"X-User-Id": "   "}) is None

    def test_full_headers(self):
        user = principal_from_headers(
            {
                "X-User-Id": "u1",
                "X-User-Name": "Ada",
                "X-User-Email": "ada@example.org",
                "X-User-Image": "https://img/ada.png",
                "X-User-Role": "admin",
            }
        )
        assert user.id == "u1"
        assert user.name == "Ada"
        assert user.email == "ada@example.org"
        assert user.image == "https://img/ada.png"
        assert user.role is UserRole.ADMIN

    def test_lookup_is_case_insensitive(self):
        user = principal_from_headers({"x-user-id": "u2", "X-USER-NAME": "Grace"})
        assert (user.id, user.name) == ("u2", "Grace")

    def test_defaults(self):
        user = principal_from_headers({"X-User-Id": "u3"})
        assert user.name == "Anonymous User"
        assert user.email == "user-u3@example.com"
        assert user.image is None
        assert user.role is UserRole.USER

    def test_unknown_role_falls_back_to_user(self):
        user = principal_from_headers({"X-User-Id": "u4", "X-User-Role": "overlord"})
        assert user.role is UserRole.USER
