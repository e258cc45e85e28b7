from calendars.models import CalendarConnection
from django.contrib import admin


@admin.register(CalendarConnection)
class CalendarConnectionAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "provider", "expires_at", "connected_at")
    list_filter = ("provider", "connected_at")
    search_fields = ("user__username", "user__email")
    ordering = ("-connected_at",)
    # 토큰 원문은 목록/검색에 노출하지 않음
    exclude = ("access_token",)
