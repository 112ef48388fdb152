from .barcode_urls import urlpatterns
