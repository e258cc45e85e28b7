from __future__ import annotations

import uuid
from typing import Callable

from common.request_id import set_request_id
from django.http import HttpRequest, HttpResponse


class RequestIdMiddleware:
    """
    - 요청마다 request_id를 생성하거나 X-Request-ID 헤더 값을 이어받고
    - 응답에 같은 값을 X-Request-ID 헤더로 돌려줍니다.

    OAuth 시작 요청과 콜백 요청을 로그에서 이어 보기 위해 사용합니다.
    """

    header_name = "HTTP_X_REQUEST_ID"
    response_header = "X-Request-ID"
    max_length = 128

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]):
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        incoming = request.META.get(self.header_name)
        request_id = (
            str(incoming).strip()[: self.max_length] if incoming else ""
        ) or uuid.uuid4().hex

        request.request_id = request_id  # type: ignore[attr-defined]
        set_request_id(request_id)

        response = self.get_response(request)
        response[self.response_header] = request_id
        return response
