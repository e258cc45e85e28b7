from __future__ import annotations

from rest_framework_simplejwt.tokens import RefreshToken
from user.models import User


class AccountSessionService:
    @staticmethod
    def issue_tokens(user: User) -> dict:
        """세션 생성: access/refresh JWT 발급 (쿠키 설정은 뷰에서)."""
        refresh = RefreshToken.for_user(user)
        return {"refresh": str(refresh), "access": str(refresh.access_token)}
