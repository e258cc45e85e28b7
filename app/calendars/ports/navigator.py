from __future__ import annotations

from typing import Protocol


class NavigatorPort(Protocol):
    def navigate(self, url: str) -> None:
        """현재 페이지를 url로 이동시킵니다. 호출 뒤에는 이 페이지의 흐름이 끝난 것으로 봅니다."""
        ...
