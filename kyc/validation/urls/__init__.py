from .validation_urls import urlpatterns
