from django.contrib import admin
from .models import CustomFood


@admin.register(CustomFood)
class CustomFoodAdmin(admin.ModelAdmin):
    list_display = (
        'name',
        'brand',
        'serving_size',
        'serving_unit',
        'calories',
        'protein',
        'fat',
        'carbs',
    )
    list_filter = ('source', 'serving_unit')
    search_fields = ('name', 'brand', 'barcode')
    readonly_fields = ('created_at', 'updated_at')

    fieldsets = (
        ('Food', {
            'fields': ('source', 'name', 'brand', 'barcode')
        }),
        ('Serving', {
            'fields': ('serving_size', 'serving_unit')
        }),
        ('Per-Serving Nutrition', {
            'fields': ('calories', 'protein', 'fat', 'carbs')
        }),
        ('Audit Information', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )
