from django.urls import path

from kyc.session.views.scan import ScanView, ScanAsyncView

urlpatterns = [
    path("scan", ScanView.as_view(), name="document-scan"),
    path("scan/async", ScanAsyncView.as_view(), name="document-scan-async"),
]
