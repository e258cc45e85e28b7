from __future__ import annotations

from calendars.ports.navigator import NavigatorPort
from django.http import HttpResponseRedirect


class HttpRedirectNavigator(NavigatorPort):
    """
    서버에서는 "브라우저 이동"을 302 응답으로 표현합니다.

    navigate()는 목적지만 기록하고, 뷰가 as_response()로 실제 응답을 만듭니다.
    """

    def __init__(self):
        self.location: str | None = None

    def navigate(self, url: str) -> None:
        self.location = url

    def as_response(self) -> HttpResponseRedirect:
        if not self.location:
            raise RuntimeError("navigate() was not called")
        return HttpResponseRedirect(self.location)
