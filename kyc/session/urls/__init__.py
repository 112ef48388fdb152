from .scan_urls import urlpatterns
