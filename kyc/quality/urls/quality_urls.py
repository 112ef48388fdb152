from django.urls import path

from kyc.quality.views.analyze import FrameQualityView
from kyc.quality.views.authenticity import AuthenticityView

urlpatterns = [
    path("quality", FrameQualityView.as_view(), name="frame-quality"),
    path("authenticity", AuthenticityView.as_view(), name="frame-authenticity"),
]
