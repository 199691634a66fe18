from django.conf import settings
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from apps.accounts.decorators import api_login_required, company_required

from .forms import CompanyForm, clean_payload
from .services import compute_kpis
from .storage import get_storage
from .utils import api_error_handler, get_user_company, parse_json_body, parse_limit


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_error_handler({'GET': 'Erro ao buscar empresas', 'POST': 'Erro ao criar empresa'})
def company_list_view(request):
    """
    GET lists every company and is open to anonymous callers (onboarding)
    POST registers a new one (document must be unique) and needs a session
    """
    storage = get_storage()

    if request.method == 'GET':
        return JsonResponse([company.to_json() for company in storage.list_companies()], safe=False)

    if not request.user.is_authenticated:
        return JsonResponse({'message': 'Não autorizado'}, status=401)

    data = clean_payload(CompanyForm, parse_json_body(request))
    company = storage.create_company(data)
    return JsonResponse(company.to_json(), status=201)


@require_http_methods(["GET"])
@api_login_required
@company_required
@api_error_handler('Erro ao buscar atividades')
def activity_list_view(request):
    limit = parse_limit(request.GET.get('limit'), settings.ACTIVITY_FEED_DEFAULT_LIMIT)
    activities = get_storage().list_activities(get_user_company(request), limit=limit)
    return JsonResponse([activity.to_json() for activity in activities], safe=False)


@require_http_methods(["GET"])
@api_login_required
@company_required
@api_error_handler('Erro ao buscar KPIs')
def kpis_view(request):
    return JsonResponse(compute_kpis(get_storage(), get_user_company(request)))
