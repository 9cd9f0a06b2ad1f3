"""
URL Configuration for Environmental Quality API project.
"""
from django.urls import path, include

urlpatterns = [
    path('api/v1/', include('apps.api.urls')),
]
