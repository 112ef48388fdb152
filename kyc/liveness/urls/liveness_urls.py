from django.urls import path

from kyc.liveness.views.score import LivenessScoreView

urlpatterns = [
    path("score", LivenessScoreView.as_view(), name="liveness-score"),
]
