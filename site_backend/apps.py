from django.apps import AppConfig

class SiteBackendConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'site_backend'
    verbose_name = 'Site backend'
