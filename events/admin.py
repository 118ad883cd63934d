from django.contrib import admin

from events.models import EventDocument


@admin.register(EventDocument)
class EventDocumentAdmin(admin.ModelAdmin):
    list_display = ["id", "__str__", "date_time", "updated_at"]
    search_fields = ["id"]
    readonly_fields = ["id", "created_at", "updated_at"]
