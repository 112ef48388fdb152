from .ocr_urls import urlpatterns
