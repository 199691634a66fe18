import logging

from django.http import HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from apps.accounts.decorators import api_login_required, company_required
from apps.core.forms import clean_payload
from apps.core.storage import get_storage
from apps.core.utils import api_error_handler, get_user_company, parse_json_body

from . import services
from .forms import ContractForm

logger = logging.getLogger(__name__)


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_login_required
@company_required
@api_error_handler({'GET': 'Erro ao buscar contratos', 'POST': 'Erro ao criar contrato'})
def contract_list_view(request):
    """
    GET: contracts with a short property {id, title, address} and
         client {id, name, email}
    POST: sign a contract (flips the property status)
    """
    storage = get_storage()
    company_id = get_user_company(request)

    if request.method == 'GET':
        rows = storage.list_contract_details(company_id)
        return JsonResponse(
            [contract.to_json(property=prop, client=client) for contract, prop, client in rows],
            safe=False,
        )

    data = clean_payload(ContractForm, parse_json_body(request))
    contract = services.create_contract(storage, company_id, data, user_id=request.user.id)
    return JsonResponse(contract.to_json(), status=201)


@csrf_exempt
@require_http_methods(["GET", "PUT", "DELETE"])
@api_login_required
@company_required
@api_error_handler({
    'GET': 'Erro ao buscar contrato',
    'PUT': 'Erro ao atualizar contrato',
    'DELETE': 'Erro ao deletar contrato',
})
def contract_detail_view(request, pk):
    storage = get_storage()
    company_id = get_user_company(request)

    if request.method == 'GET':
        return JsonResponse(storage.get_contract(company_id, pk).to_json())

    if request.method == 'PUT':
        storage.get_contract(company_id, pk)
        data = clean_payload(ContractForm, parse_json_body(request), partial=True)
        contract = services.update_contract(storage, company_id, pk, data)
        return JsonResponse(contract.to_json())

    storage.delete_contract(company_id, pk)
    logger.info(f"Contract {pk} deleted by {request.user.email}")
    return HttpResponse(status=204)
