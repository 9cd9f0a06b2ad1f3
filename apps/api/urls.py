"""
URL routing for API endpoints.
"""
from django.urls import path
from .views import EnvironmentView, HealthAdviceView, ScalesView, HealthCheckView

app_name = 'api'

urlpatterns = [
    path('environment/', EnvironmentView.as_view(), name='environment'),
    path('health-advice/', HealthAdviceView.as_view(), name='health-advice'),
    path('scales/', ScalesView.as_view(), name='scales'),
    path('health/', HealthCheckView.as_view(), name='health'),
]
