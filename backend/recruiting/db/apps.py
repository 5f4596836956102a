"""
Database models app configuration.
"""
from django.apps import AppConfig


class DbConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'recruiting.db'
    label = 'db'
    verbose_name = 'Recruiting Data'
