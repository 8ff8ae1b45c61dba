from django.apps import AppConfig


class AmenitiesConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.core.amenities'
    label = 'amenities'
