from .quality_urls import urlpatterns
