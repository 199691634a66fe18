import logging

from django.contrib.auth import authenticate, login, logout
from django.http import JsonResponse
from django.views.decorators.cache import never_cache
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from apps.core.exceptions import ValidationFailed
from apps.core.utils import api_error_handler, parse_json_body

from .decorators import api_login_required
from .forms import LoginForm

logger = logging.getLogger(__name__)


# AUTHENTICATION VIEWS
@csrf_exempt
@never_cache
@require_http_methods(["POST"])
@api_error_handler('Erro ao autenticar')
def login_view(request):
    form = LoginForm(parse_json_body(request))
    if not form.is_valid():
        raise ValidationFailed(form.error_map())

    # Returns User object if valid, None if invalid or inactive
    user = authenticate(request, username=form.cleaned_data['email'], password=form.cleaned_data['password'])
    if user is None:
        logger.info(f"Failed login attempt for {form.cleaned_data['email']}")
        return JsonResponse({'message': 'E-mail ou senha inválidos'}, status=401)

    login(request, user)
    logger.info(f"User {user.email} logged in")

    return JsonResponse(user.to_json())


@csrf_exempt
@require_http_methods(["POST"])
def logout_view(request):
    # Logging out an anonymous session is a no-op
    logout(request)
    return JsonResponse({'message': 'Sessão encerrada'})


@never_cache
@require_http_methods(["GET"])
@api_login_required
def current_user_view(request):
    return JsonResponse(request.user.to_json())
