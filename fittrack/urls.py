"""
URL configuration for fittrack project.

Only the Django admin is routed; data enters through management commands.
"""

from django.contrib import admin
from django.urls import path

urlpatterns = [
    path("admin/", admin.site.urls),
]
