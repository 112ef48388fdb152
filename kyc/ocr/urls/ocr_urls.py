from django.urls import path

from kyc.ocr.views.extract import TextExtractView

urlpatterns = [
    path("text/extract", TextExtractView.as_view(), name="document-text-extract"),
]
