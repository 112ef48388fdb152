from django.urls import path

from kyc.barcode.views.decode import BarcodeDecodeView

urlpatterns = [
    path("barcode/decode", BarcodeDecodeView.as_view(), name="document-barcode-decode"),
]
