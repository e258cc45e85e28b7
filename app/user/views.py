from common.jwt_cookies import delete_jwt_cookies, set_jwt_cookies
from django.conf import settings
from django.shortcuts import render
from django.utils.http import url_has_allowed_host_and_scheme
from drf_spectacular.utils import OpenApiTypes, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from user.serializers import (
    CurrentUserSerializer,
    UserLoginSerializer,
    UserRegistrationSerializer,
)
from user.services import AccountSessionService


def _signed_in_response(user, http_status: int) -> Response:
    tokens = AccountSessionService.issue_tokens(user)
    response = Response(
        {"user": CurrentUserSerializer(user).data}, status=http_status
    )
    # 토큰은 body 대신 HttpOnly Cookie 로만 전달
    return set_jwt_cookies(response, tokens["access"], tokens["refresh"])


class UserRegistrationView(APIView):
    permission_classes = []  # No permission required for registration
    authentication_classes = []

    @extend_schema(
        request=UserRegistrationSerializer,
        responses={201: OpenApiTypes.OBJECT},
        summary="Register",
        description="계정을 만들고 바로 로그인 상태(JWT 쿠키)로 응답합니다.",
    )
    def post(self, request):
        serializer = UserRegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return _signed_in_response(user, status.HTTP_201_CREATED)


class UserLoginView(APIView):
    permission_classes = []  # No permission required for login
    authentication_classes = []

    @extend_schema(
        request=UserLoginSerializer,
        responses={200: OpenApiTypes.OBJECT},
        summary="User Login",
        description="Login with email and password; JWT is set as HttpOnly cookies.",
    )
    def post(self, request):
        serializer = UserLoginSerializer(
            data=request.data, context={"request": request}
        )
        serializer.is_valid(raise_exception=True)
        return _signed_in_response(
            serializer.validated_data["user"], status.HTTP_200_OK
        )


class UserLogoutView(APIView):
    permission_classes = []
    authentication_classes = []

    @extend_schema(request=None, responses={204: None}, summary="Logout")
    def post(self, request):
        response = Response(status=status.HTTP_204_NO_CONTENT)
        return delete_jwt_cookies(response)


class CurrentUserView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: CurrentUserSerializer}, summary="Current user")
    def get(self, request):
        return Response(CurrentUserSerializer(request.user).data)


def login_page(request):
    """
    브라우저 로그인 화면. 로그인 API 로 JWT 쿠키를 받은 뒤 next 로 이동합니다.
    next 는 같은 호스트의 경로만 허용합니다.
    """
    next_path = request.GET.get("next") or ""
    if not url_has_allowed_host_and_scheme(
        next_path, allowed_hosts={request.get_host()}, require_https=request.is_secure()
    ):
        next_path = getattr(settings, "CALENDAR_AUTHENTICATED_PATH", "/calendar")
    return render(request, "user/login.html", {"next": next_path})
