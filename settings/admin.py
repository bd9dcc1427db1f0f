from django.contrib import admin
from .models import ProgramSettings


@admin.register(ProgramSettings)
class ProgramSettingsAdmin(admin.ModelAdmin):
    list_display = ['id', 'profile', 'start_date', 'total_days', 'current_day']
    list_filter = ['profile']
    readonly_fields = ['id', 'created_at', 'updated_at', 'current_day']
    ordering = ['-id']

    fieldsets = (
        ('Program', {
            'fields': ('id', 'profile', 'start_date', 'total_days', 'current_day')
        }),
        ('Audit Information', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def current_day(self, obj):
        """Show today's day number within the program"""
        if not obj.pk:
            return '-'
        return f"Day {obj.current_day_number()} of {obj.total_days}"
    current_day.short_description = 'Current Day'
