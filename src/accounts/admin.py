"""Admin interface for accounts app."""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from unfold.admin import ModelAdmin

from accounts.models import AdminUser, Role


@admin.register(Role)
class RoleAdmin(ModelAdmin):  # type: ignore[misc]
    list_display = ["name", "description", "user_count"]
    search_fields = ["name", "description"]
    readonly_fields = ["id", "created_at", "updated_at"]

    @admin.display(description="Users")
    def user_count(self, obj: Role) -> int:
        return obj.users.count()


@admin.register(AdminUser)
class AdminUserAdmin(UserAdmin, ModelAdmin):  # type: ignore[type-arg,misc]
    """Back-office users with their single role."""

    list_display = ["username", "email", "display_name", "role", "is_active", "is_superuser", "last_login"]
    list_filter = ["role", "is_active", "is_superuser", "date_joined", "last_login"]
    list_select_related = ["role"]
    search_fields = ["username", "first_name", "last_name", "email"]
    ordering = ["username"]
    readonly_fields = ["id", "date_joined", "last_login"]
    autocomplete_fields = ["role"]

    fieldsets = (
        ("Personal Information", {"fields": ("id", ("username", "email"), ("first_name", "last_name"))}),
        ("Authentication", {"fields": ("password", ("date_joined", "last_login"))}),
        ("Role", {"fields": ("role",)}),
        (
            "Permissions",
            {
                "fields": (("is_active", "is_staff", "is_superuser"),),
                "classes": ["collapse"],
            },
        ),
    )
