from django.contrib import admin
from .models import DailyLog


@admin.register(DailyLog)
class DailyLogAdmin(admin.ModelAdmin):
    list_display = (
        'date',
        'profile',
        'day_number',
        'weight',
        'protein',
        'fat',
        'carbs',
        'steps',
        'food_count',
    )
    list_filter = ('profile',)
    date_hierarchy = 'date'
    readonly_fields = ('created_at', 'updated_at', 'food_count')

    fieldsets = (
        ('Day', {
            'fields': ('profile', 'date', 'day_number')
        }),
        ('Body & Nutrition', {
            'fields': ('weight', 'fat_percent', 'protein', 'fat', 'carbs', 'foods', 'food_count')
        }),
        ('Activity & Sleep', {
            'fields': ('workout', 'strava', 'steps', 'sleep_time', 'sleep_score')
        }),
        ('Audit Information', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def food_count(self, obj):
        """Number of logged food entries"""
        return len(obj.foods or [])
    food_count.short_description = 'Foods'
