"""
URL configuration for the calendar connect project.

- /api/v1/users/      계정/세션 (register, login, logout, me)
- /api/v1/calendars/  캘린더 OAuth 연결 및 토큰 저장
- /oauth/<provider>/callback  provider 가 돌아오는 브라우저 페이지
- /login, /calendar  JWT 쿠키로 보호되는 브라우저 페이지와 로그인 화면
"""

from calendars.views import calendar_page, oauth_callback_page
from django.contrib import admin
from django.http import JsonResponse
from django.urls import include, path
from django.views.decorators.http import require_http_methods
from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularRedocView,
    SpectacularSwaggerView,
)
from user.views import login_page


@require_http_methods(["GET"])
def health_check(request):
    """헬스체크 엔드포인트"""
    return JsonResponse({"status": "healthy", "message": "Service is running"})


urlpatterns = [
    # Admin
    path("admin/", admin.site.urls),
    # API v1 Endpoints
    path("api/v1/users/", include("user.urls")),
    path("api/v1/calendars/", include("calendars.urls")),
    # Browser pages
    path("login", login_page, name="login_page"),
    path("calendar", calendar_page, name="calendar"),
    path(
        "oauth/<str:provider>/callback",
        oauth_callback_page,
        name="calendar_oauth_callback_page",
    ),
    # Health Check
    path("health/", health_check, name="health_check"),
    # API Documentation (Spectacular)
    path("api/v1/schema/", SpectacularAPIView.as_view(), name="schema"),
    path(
        "api/v1/schema/swagger-ui/",
        SpectacularSwaggerView.as_view(url_name="schema"),
        name="swagger-ui",
    ),
    path(
        "api/v1/schema/redoc/",
        SpectacularRedocView.as_view(url_name="schema"),
        name="redoc",
    ),
]
