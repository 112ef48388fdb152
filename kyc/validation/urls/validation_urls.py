from django.urls import path

from kyc.validation.views.completeness import CompletenessView
from kyc.validation.views.match import DocumentMatchView

urlpatterns = [
    path("completeness", CompletenessView.as_view(), name="document-completeness"),
    path("match", DocumentMatchView.as_view(), name="document-match"),
]
