from django.contrib import admin
from django.contrib.auth import get_user_model


class UserAdmin(admin.ModelAdmin):
    list_display = ("id", "username", "email", "display_name", "date_joined")
    list_filter = ("date_joined",)
    search_fields = ("username", "email", "display_name")
    ordering = ("-date_joined",)


admin.site.register(get_user_model(), UserAdmin)
