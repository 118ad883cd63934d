from django.contrib import admin

from accounts.models import PhoneIndexEntry, UserProfile


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ["email", "phone_e164", "role", "created_at"]
    list_filter = ["role"]
    search_fields = ["email", "phone_e164"]


@admin.register(PhoneIndexEntry)
class PhoneIndexEntryAdmin(admin.ModelAdmin):
    list_display = ["phone_e164", "email"]
    search_fields = ["phone_e164", "email"]
