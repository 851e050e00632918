# vt_core/iam/services/identity.py
from __future__ import annotations

import logging

from django.contrib.auth.models import update_last_login

from vt_core.common.errors import AuthenticationError
from vt_core.iam.selectors import user_by_email
from vt_core.iam.tokens import SiteAccessToken

logger = logging.getLogger(__name__)


class IdentityService:
    @staticmethod
    def authenticate(*, email: str, password: str):
        """
        Email lookup is case-insensitive. The three failure modes carry
        distinct error codes but are all 401s.
        """
        user = user_by_email(email)
        if user is None:
            logger.warning("login.denied reason=user_not_found")
            raise AuthenticationError("No account found for this email.", code="user_not_found")

        if not user.check_password(password):
            logger.warning("login.denied reason=invalid_password user_id=%s", user.id)
            raise AuthenticationError("Incorrect password.", code="invalid_password")

        if not user.is_active:
            logger.warning("login.denied reason=account_disabled user_id=%s", user.id)
            raise AuthenticationError("This account is disabled.", code="account_disabled")

        update_last_login(None, user)
        logger.info("login.ok user_id=%s", user.id)
        return user

    @staticmethod
    def issue_access_token(user) -> SiteAccessToken:
        return SiteAccessToken.for_user(user)
