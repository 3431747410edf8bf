from django.conf import settings
from django.http import JsonResponse
from django.middleware.csrf import get_token
from django.utils.decorators import method_decorator
from django.views.decorators.csrf import csrf_protect, ensure_csrf_cookie
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

REFRESH_COOKIE_PATH = "/api/token/"
REFRESH_MAX_AGE = 7 * 24 * 60 * 60
ACCESS_MAX_AGE = 30 * 60


def _set_access_cookie(res, access):
    res.set_cookie(
        settings.ACCESS_COOKIE_NAME, access,
        max_age=ACCESS_MAX_AGE,
        httponly=True,
        secure=settings.AUTH_COOKIE_SECURE,
        samesite=settings.AUTH_COOKIE_SAMESITE,
        path="/",
    )


@ensure_csrf_cookie
def csrf(request):
    """
    GET /api/csrf/ -> sets csrftoken cookie and returns it as JSON
    Call once on dashboard load before making POSTs that need CSRF.
    """
    return JsonResponse({"csrfToken": get_token(request)})


@method_decorator(csrf_protect, name="post")
class CookieTokenObtainPairView(TokenObtainPairView):
    def post(self, request, *args, **kwargs):
        res = super().post(request, *args, **kwargs)
        if res.status_code == status.HTTP_200_OK and "refresh" in res.data:
            refresh = res.data.pop("refresh")
            res.set_cookie(
                settings.REFRESH_COOKIE_NAME, refresh,
                max_age=REFRESH_MAX_AGE,
                httponly=True,
                secure=settings.AUTH_COOKIE_SECURE,
                samesite=settings.AUTH_COOKIE_SAMESITE,
                path=REFRESH_COOKIE_PATH,
            )
            _set_access_cookie(res, res.data["access"])
        return res


@method_decorator(csrf_protect, name="post")
class CookieTokenRefreshView(TokenRefreshView):
    """
    POST /api/token/refresh/ -> returns {"access": "..."} using the HttpOnly cookie.
    Requires X-CSRFToken header (double submit).
    """
    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(
            data={"refresh": request.COOKIES.get(settings.REFRESH_COOKIE_NAME) or ""}
        )
        try:
            serializer.is_valid(raise_exception=True)
        except TokenError as e:
            raise InvalidToken(e.args[0])
        res = Response(serializer.validated_data, status=status.HTTP_200_OK)
        _set_access_cookie(res, serializer.validated_data["access"])
        return res


@method_decorator(csrf_protect, name="post")
class LogoutView(APIView):
    authentication_classes = ()
    permission_classes = ()

    def post(self, request):
        r = Response({"detail": "Logged out"})
        r.delete_cookie(settings.REFRESH_COOKIE_NAME, path=REFRESH_COOKIE_PATH)
        r.delete_cookie(settings.ACCESS_COOKIE_NAME, path="/")
        return r
