from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.translation import gettext_lazy as _

from uniconnect.users import models


@admin.register(models.User)
class UserAdmin(BaseUserAdmin):
    fieldsets = (
        *BaseUserAdmin.fieldsets,
        (_("Campus"), {"fields": ("name", "university", "last_seen")}),
    )
    list_display = ["username", "name", "email", "university", "last_seen"]
    search_fields = ["username", "name", "email", "university"]
    list_filter = ["university", "is_active"]
