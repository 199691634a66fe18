# Decorators in this file:
# 1. api_login_required - Session user required (401 JSON otherwise)
# 2. company_required - User must belong to a company (403 JSON otherwise)
#
# The API is consumed by a single-page front end, so every refusal is a JSON
# body with a "message" key instead of a redirect to a login page.
# ==============================================================================

from functools import wraps

from django.http import JsonResponse


def api_login_required(view_func):
    """
    Decorator: the request must carry an authenticated session

    Usage:
        @api_login_required
        def property_list_view(request):
            ...
    """

    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return JsonResponse({'message': 'Não autorizado'}, status=401)
        return view_func(request, *args, **kwargs)

    return wrapper


def company_required(view_func):
    """
    Checks:
    1. User is authenticated
    2. User has company assigned

    Every business query is scoped by request.user.company_id, so a user
    without a company (e.g. a bare superuser) cannot use the API.
    """

    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return JsonResponse({'message': 'Não autorizado'}, status=401)

        if request.user.company_id is None:
            return JsonResponse({'message': 'Usuário sem empresa vinculada'}, status=403)

        return view_func(request, *args, **kwargs)

    return wrapper
