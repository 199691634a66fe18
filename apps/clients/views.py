import logging

from django.conf import settings
from django.http import HttpResponse, JsonResponse
from django.utils import timezone
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from apps.accounts.decorators import api_login_required, company_required
from apps.core.forms import clean_payload
from apps.core.storage import get_storage
from apps.core.utils import api_error_handler, get_user_company, parse_json_body

from .forms import ClientForm, InteractionForm
from .pipeline import build_pipeline_summary
from .services import create_client, record_interaction

logger = logging.getLogger(__name__)


def _client_json(storage, client):
    return client.to_json(tags=storage.client_tags(client))


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_login_required
@company_required
@api_error_handler({'GET': 'Erro ao buscar clientes', 'POST': 'Erro ao criar cliente'})
def client_list_view(request):
    """
    GET: clients of the company (optional ?type= and ?stage= filters)
    POST: create a client
    """
    storage = get_storage()
    company_id = get_user_company(request)

    if request.method == 'GET':
        clients = storage.list_clients(
            company_id,
            client_type=request.GET.get('type') or None,
            stage=request.GET.get('stage') or None,
        )
        return JsonResponse([_client_json(storage, client) for client in clients], safe=False)

    data = clean_payload(ClientForm, parse_json_body(request))
    client = create_client(storage, company_id, data, user_id=request.user.id)

    logger.info(f"Client {client.id} created by {request.user.email}")
    return JsonResponse(_client_json(storage, client), status=201)


@csrf_exempt
@require_http_methods(["GET", "PUT", "DELETE"])
@api_login_required
@company_required
@api_error_handler({
    'GET': 'Erro ao buscar cliente',
    'PUT': 'Erro ao atualizar cliente',
    'DELETE': 'Erro ao deletar cliente',
})
def client_detail_view(request, pk):
    storage = get_storage()
    company_id = get_user_company(request)

    if request.method == 'GET':
        return JsonResponse(_client_json(storage, storage.get_client(company_id, pk)))

    if request.method == 'PUT':
        storage.get_client(company_id, pk)
        data = clean_payload(ClientForm, parse_json_body(request), partial=True)
        client = storage.update_client(company_id, pk, data)
        return JsonResponse(_client_json(storage, client))

    storage.delete_client(company_id, pk)
    return HttpResponse(status=204)


@require_http_methods(["GET"])
@api_login_required
@company_required
@api_error_handler('Erro ao calcular pipeline')
def client_pipeline_view(request):
    storage = get_storage()
    clients = storage.list_clients(get_user_company(request))

    summary = build_pipeline_summary(
        clients,
        now=timezone.now(),
        follow_up_limit=settings.PIPELINE_FOLLOW_UP_LIMIT,
    )
    return JsonResponse(summary)


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_login_required
@company_required
@api_error_handler({'GET': 'Erro ao buscar interações', 'POST': 'Erro ao registrar interação'})
def client_interactions_view(request, pk):
    """
    GET: interaction history of a client, newest first
    POST: record an interaction (updates the client's contact dates/stage)
    """
    storage = get_storage()
    company_id = get_user_company(request)

    if request.method == 'GET':
        interactions = storage.list_interactions(company_id, pk)
        return JsonResponse([interaction.to_json() for interaction in interactions], safe=False)

    # Tenant check first: unknown client is a 404 even with an invalid body
    storage.get_client(company_id, pk)
    data = clean_payload(InteractionForm, parse_json_body(request))

    interaction, client = record_interaction(storage, company_id, pk, data, user_id=request.user.id)

    response = interaction.to_json()
    response['client'] = _client_json(storage, client)
    return JsonResponse(response, status=201)
