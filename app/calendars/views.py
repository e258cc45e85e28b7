"""
Calendar OAuth Views (Thin Controller)

비즈니스 로직은 CalendarOAuthService 에 위임하고 HTTP 요청/응답 처리만 담당합니다.
"""

import dataclasses
import logging

from calendars.adapters.redirect_navigator import HttpRedirectNavigator
from calendars.application.usecases.complete_oauth_callback import (
    STATUS_ERROR,
    CallbackOutcome,
)
from calendars.domain.oauth import CalendarProvider
from calendars.serializers import CalendarOAuthCallbackSerializer, CalendarTokenSerializer
from calendars.services import CalendarOAuthService
from common.application.result import Err
from common.authentication import jwt_login_required
from django.http import Http404
from django.shortcuts import render
from drf_spectacular.utils import OpenApiTypes, extend_schema
from rest_framework import status
from rest_framework.exceptions import AuthenticationFailed, NotAuthenticated
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

logger = logging.getLogger(__name__)

_ERROR_STATUS = {
    "FEATURE_DISABLED": status.HTTP_404_NOT_FOUND,
    "UNKNOWN_PROVIDER": status.HTTP_404_NOT_FOUND,
    "CONFIG_MISSING": status.HTTP_400_BAD_REQUEST,
    "STATE_MISMATCH": status.HTTP_400_BAD_REQUEST,
    "STATE_EXPIRED": status.HTTP_400_BAD_REQUEST,
    "PROVIDER_ERROR": status.HTTP_400_BAD_REQUEST,
    "MALFORMED_RESPONSE": status.HTTP_400_BAD_REQUEST,
    "SUBMISSION_FAILED": status.HTTP_502_BAD_GATEWAY,
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "INVALID_PROVIDER": status.HTTP_400_BAD_REQUEST,
    "INVALID_EXPIRES_IN": status.HTTP_400_BAD_REQUEST,
    "STORE_FAILED": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _status_for(code: str | None) -> int:
    return _ERROR_STATUS.get(code or "", status.HTTP_400_BAD_REQUEST)


def _error_response(err: Err) -> Response:
    return Response(
        err.as_payload(),
        status=_status_for(err.code),
    )


class CalendarProviderListView(APIView):
    @extend_schema(
        responses={200: OpenApiTypes.OBJECT},
        summary="List calendar providers",
        description="연결 가능한 캘린더 provider 와 설정 여부를 반환합니다.",
    )
    def get(self, request):
        return Response(CalendarOAuthService.list_providers(request=request))


class CalendarOAuthStartView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        responses={302: None, 400: OpenApiTypes.OBJECT, 404: OpenApiTypes.OBJECT},
        summary="Start calendar OAuth (redirect)",
    )
    def get(self, request, provider: str):
        navigator = HttpRedirectNavigator()
        result = CalendarOAuthService.start_oauth(
            request=request, provider=provider, navigator=navigator
        )
        if isinstance(result, Err):
            return _error_response(result)
        return navigator.as_response()

    @extend_schema(
        request=None,
        responses={200: OpenApiTypes.OBJECT, 400: OpenApiTypes.OBJECT},
        summary="Start calendar OAuth (authorization URL)",
        description="리다이렉트 대신 authorization_url 을 JSON 으로 돌려줍니다.",
    )
    def post(self, request, provider: str):
        result = CalendarOAuthService.start_oauth(
            request=request, provider=provider, navigator=HttpRedirectNavigator()
        )
        if isinstance(result, Err):
            return _error_response(result)
        return Response(result.value, status=status.HTTP_200_OK)


class CalendarOAuthCallbackView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        request=CalendarOAuthCallbackSerializer,
        responses={200: OpenApiTypes.OBJECT, 400: OpenApiTypes.OBJECT},
        summary="Complete calendar OAuth",
        description="콜백 페이지의 URL fragment 를 검증하고 토큰을 저장합니다.",
    )
    def post(self, request):
        serializer = CalendarOAuthCallbackSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = CalendarOAuthService.complete_oauth(
            request=request, fragment=serializer.validated_data["fragment"]
        )
        if isinstance(result, Err):
            return _error_response(result)

        outcome: CallbackOutcome = result.value
        http_status = (
            _status_for(outcome.error_code)
            if outcome.status == STATUS_ERROR
            else status.HTTP_200_OK
        )
        return Response(dataclasses.asdict(outcome), status=http_status)

    def handle_exception(self, exc):
        # 로그인 만료 시에도 페이지 스크립트가 따라갈 redirect_to 를 포함한 결과 형식으로 응답
        if isinstance(exc, (NotAuthenticated, AuthenticationFailed)):
            outcome = CalendarOAuthService.unauthenticated_callback()
            return Response(
                dataclasses.asdict(outcome), status=status.HTTP_401_UNAUTHORIZED
            )
        return super().handle_exception(exc)


class CalendarTokenView(APIView):
    """
    토큰 저장 함수. 인증 실패도 {success, message} 형식으로 응답하기 위해
    permission 대신 유스케이스에서 사용자 유무를 확인합니다.
    """

    permission_classes = []

    @extend_schema(
        request=CalendarTokenSerializer,
        responses={200: OpenApiTypes.OBJECT, 400: OpenApiTypes.OBJECT},
        summary="Store calendar OAuth token",
    )
    def post(self, request):
        serializer = CalendarTokenSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {"success": False, "message": "Invalid request body"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        user = request.user
        result = CalendarOAuthService.store_token(
            user_id=user.pk if user.is_authenticated else None,
            data=serializer.validated_data,
        )
        if isinstance(result, Err):
            return Response(
                {"success": False, "message": result.message},
                status=_status_for(result.code),
            )
        return Response(result.value, status=status.HTTP_200_OK)

    def handle_exception(self, exc):
        # 만료/위조된 JWT 쿠키도 {success, message} 형식의 401 로 응답
        if isinstance(exc, (NotAuthenticated, AuthenticationFailed)):
            return Response(
                {
                    "success": False,
                    "message": "Unauthorized. Please log in to connect your calendar.",
                },
                status=status.HTTP_401_UNAUTHORIZED,
            )
        return super().handle_exception(exc)


class CalendarConnectionListView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        responses={200: OpenApiTypes.OBJECT},
        summary="List connected calendars",
    )
    def get(self, request):
        return Response(CalendarOAuthService.list_connections(user_id=request.user.pk))


@jwt_login_required
def oauth_callback_page(request, provider: str):
    """provider 가 돌려보낸 fragment 를 API 로 전달하는 콜백 페이지."""
    if provider not in {p.value for p in CalendarProvider}:
        raise Http404("Unknown calendar provider")
    return render(
        request,
        "calendars/oauth_callback.html",
        CalendarOAuthService.callback_page_context(provider=provider),
    )


@jwt_login_required
def calendar_page(request):
    return render(request, "calendars/calendar.html")
