from django.contrib import admin
from .models import Profile


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ['id', 'username', 'created_at']
    search_fields = ['username']
    readonly_fields = ['created_at', 'updated_at']
    ordering = ['username']
