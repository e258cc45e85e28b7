from django.conf import settings
from django.db import models


class CalendarConnection(models.Model):
    """
    사용자별 외부 캘린더 OAuth 토큰 (provider 당 1건).

    - expires_at: 만료 시각 (epoch milliseconds)
    - access_token은 평문 저장 (암호화/갱신은 범위 밖)
    """

    PROVIDER_GOOGLE = "google"
    PROVIDER_MICROSOFT = "microsoft"
    PROVIDER_CHOICES = [
        (PROVIDER_GOOGLE, "Google Calendar"),
        (PROVIDER_MICROSOFT, "Microsoft Outlook"),
    ]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="calendar_connections",
    )
    provider = models.CharField(max_length=20, choices=PROVIDER_CHOICES)
    access_token = models.TextField()
    scope = models.TextField(blank=True, default="")
    expires_at = models.BigIntegerField(help_text="토큰 만료 시각 (epoch ms)")
    connected_at = models.DateTimeField()

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "calendar_connection"
        constraints = [
            models.UniqueConstraint(
                fields=["user", "provider"],
                name="uniq_calendar_user_provider",
            ),
        ]
        ordering = ["provider"]

    def __str__(self) -> str:  # pragma: no cover
        return f"CalendarConnection(user={self.user_id}, provider={self.provider})"
