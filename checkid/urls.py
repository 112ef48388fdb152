from django.urls import path, include, re_path
from django.http import JsonResponse
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView, SpectacularRedocView
from rest_framework.permissions import AllowAny

from .settings.base import API_PREFIX, API_VERSION, HEALTH_INFO

def health_view(_request):
    return JsonResponse({"status": "ok", **HEALTH_INFO()})

urlpatterns = [
    path("health/", health_view, name="health"),

    # OpenAPI
    path(f"{API_PREFIX}/{API_VERSION}/schema/", SpectacularAPIView.as_view(), name="schema"),
    path(
        f"{API_PREFIX}/{API_VERSION}/docs/",
        SpectacularSwaggerView.as_view(
            url_name="schema",
            permission_classes=[AllowAny],
            authentication_classes=[],
        ),
        name="swagger-ui",
    ),
    path(
        f"{API_PREFIX}/{API_VERSION}/redoc/",
        SpectacularRedocView.as_view(
            url_name="schema",
            permission_classes=[AllowAny],
            authentication_classes=[],
        ),
        name="redoc",
    ),

    path(f"{API_PREFIX}/{API_VERSION}/frame/", include("kyc.quality.urls")),
    path(f"{API_PREFIX}/{API_VERSION}/document/", include("kyc.barcode.urls")),
    path(f"{API_PREFIX}/{API_VERSION}/document/", include("kyc.ocr.urls")),
    path(f"{API_PREFIX}/{API_VERSION}/document/", include("kyc.validation.urls")),
    path(f"{API_PREFIX}/{API_VERSION}/document/", include("kyc.session.urls")),
    path(f"{API_PREFIX}/{API_VERSION}/liveness/", include("kyc.liveness.urls")),
]


urlpatterns += [
    re_path(
        r"^$",
        SpectacularSwaggerView.as_view(
            url_name="schema",
            permission_classes=[AllowAny],
            authentication_classes=[],
        ),
    ),
]
