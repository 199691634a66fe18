import logging

from django.http import HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from apps.accounts.decorators import api_login_required, company_required
from apps.core.forms import clean_payload
from apps.core.storage import get_storage
from apps.core.utils import api_error_handler, get_user_company, parse_json_body

from .forms import PropertyForm
from .services import create_property

logger = logging.getLogger(__name__)


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_login_required
@company_required
@api_error_handler({'GET': 'Erro ao buscar imóveis', 'POST': 'Erro ao criar imóvel'})
def property_list_view(request):
    storage = get_storage()
    company_id = get_user_company(request)

    if request.method == 'GET':
        properties = storage.list_properties(company_id)
        return JsonResponse([prop.to_json() for prop in properties], safe=False)

    data = clean_payload(PropertyForm, parse_json_body(request))
    prop = create_property(storage, company_id, data, user_id=request.user.id)

    logger.info(f"Property {prop.id} created by {request.user.email}")
    return JsonResponse(prop.to_json(), status=201)


@csrf_exempt
@require_http_methods(["GET", "PUT", "DELETE"])
@api_login_required
@company_required
@api_error_handler({
    'GET': 'Erro ao buscar imóvel',
    'PUT': 'Erro ao atualizar imóvel',
    'DELETE': 'Erro ao deletar imóvel',
})
def property_detail_view(request, pk):
    storage = get_storage()
    company_id = get_user_company(request)

    if request.method == 'GET':
        return JsonResponse(storage.get_property(company_id, pk).to_json())

    if request.method == 'PUT':
        storage.get_property(company_id, pk)
        data = clean_payload(PropertyForm, parse_json_body(request), partial=True)
        prop = storage.update_property(company_id, pk, data)
        return JsonResponse(prop.to_json())

    storage.delete_property(company_id, pk)
    return HttpResponse(status=204)
