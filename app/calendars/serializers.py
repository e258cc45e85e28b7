from rest_framework import serializers


class CalendarOAuthCallbackSerializer(serializers.Serializer):
    """
    콜백 페이지가 전달하는 URL fragment (`#` 뒤 전체)
    """

    fragment = serializers.CharField(
        max_length=8000, required=False, allow_blank=True, default=""
    )


class CalendarTokenSerializer(serializers.Serializer):
    """
    토큰 저장 함수 요청 바디. 필수 여부 검증은 유스케이스에서 처리합니다
    (응답 형식 {success, message} 를 유지하기 위함).
    """

    provider = serializers.CharField(required=False, allow_blank=True)
    accessToken = serializers.CharField(required=False, allow_blank=True)
    scope = serializers.CharField(required=False, allow_blank=True)
    expiresIn = serializers.CharField(required=False, allow_blank=True)
