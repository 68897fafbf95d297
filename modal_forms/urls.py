"""
Modal Forms — URL Configuration

@file modal_forms/urls.py
"""

from django.urls import path

from .views import FormValidationView

app_name = 'modal_forms'

urlpatterns = [
    path('<slug:form_name>/validate/', FormValidationView.as_view(), name='validate'),
]
