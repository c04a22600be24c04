"""
Django admin configuration for handle reservations.

Reservations are read-only here: creating or deleting one outside
HandleReservationService would leave Profile.handle out of sync.
"""

from django.contrib import admin

from handles.models import HandleReservation


@admin.register(HandleReservation)
class HandleReservationAdmin(admin.ModelAdmin):
    list_display = ("handle", "account", "reserved_at")
    search_fields = ("handle", "account__email")
    ordering = ("handle",)
    readonly_fields = ("handle", "account", "reserved_at")
    list_select_related = ("account",)

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
