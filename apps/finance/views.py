from django.http import HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from apps.accounts.decorators import api_login_required, company_required
from apps.core.forms import clean_payload
from apps.core.storage import get_storage
from apps.core.utils import api_error_handler, get_user_company, parse_json_body

from . import services
from .forms import TransactionForm


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_login_required
@company_required
@api_error_handler({'GET': 'Erro ao buscar transações', 'POST': 'Erro ao criar transação'})
def transaction_list_view(request):
    storage = get_storage()
    company_id = get_user_company(request)

    if request.method == 'GET':
        rows = storage.list_transaction_details(company_id)
        return JsonResponse([t.to_json(contract=contract) for t, contract in rows], safe=False)

    data = clean_payload(TransactionForm, parse_json_body(request))
    transaction = services.create_transaction(storage, company_id, data, user_id=request.user.id)
    return JsonResponse(transaction.to_json(), status=201)


@csrf_exempt
@require_http_methods(["GET", "PUT", "DELETE"])
@api_login_required
@company_required
@api_error_handler({
    'GET': 'Erro ao buscar transação',
    'PUT': 'Erro ao atualizar transação',
    'DELETE': 'Erro ao deletar transação',
})
def transaction_detail_view(request, pk):
    storage = get_storage()
    company_id = get_user_company(request)

    if request.method == 'GET':
        return JsonResponse(storage.get_transaction(company_id, pk).to_json())

    if request.method == 'PUT':
        storage.get_transaction(company_id, pk)
        data = clean_payload(TransactionForm, parse_json_body(request), partial=True)
        transaction = services.update_transaction(storage, company_id, pk, data)
        return JsonResponse(transaction.to_json())

    storage.delete_transaction(company_id, pk)
    return HttpResponse(status=204)
