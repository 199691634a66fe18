import logging

from django.http import HttpResponse, JsonResponse
from django.utils import timezone
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from apps.accounts.decorators import api_login_required, company_required
from apps.core.exceptions import ValidationFailed
from apps.core.forms import clean_payload
from apps.core.storage import get_storage
from apps.core.utils import (
    api_error_handler,
    get_user_company,
    parse_bool,
    parse_datetime_param,
    parse_json_body,
    parse_limit,
)

from . import services
from .forms import AppointmentForm
from .models import Appointment

logger = logging.getLogger(__name__)


def _list_filters(request):
    """
    Query parameters of GET /api/appointments

    ?status=  ?clientId=  ?upcoming=true  ?fromDate=  ?toDate=  ?limit=
    """
    params = request.GET
    filters = {'now': timezone.now()}

    status = params.get('status')
    if status:
        if status not in dict(Appointment.STATUS_CHOICES):
            raise ValidationFailed({'status': [f'Status inválido: {status}']})
        filters['status'] = status

    client_id = params.get('clientId')
    if client_id:
        try:
            filters['client_id'] = int(client_id)
        except ValueError:
            raise ValidationFailed({'client_id': ['Cliente inválido']})

    filters['upcoming'] = parse_bool(params.get('upcoming'))
    filters['from_date'] = parse_datetime_param(params.get('fromDate'), 'from_date')
    filters['to_date'] = parse_datetime_param(params.get('toDate'), 'to_date', end_of_day=True)
    filters['limit'] = parse_limit(params.get('limit'), None)

    return filters


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_login_required
@company_required
@api_error_handler({'GET': 'Erro ao buscar agendamentos', 'POST': 'Erro ao criar agendamento'})
def appointment_list_view(request):
    storage = get_storage()
    company_id = get_user_company(request)

    if request.method == 'GET':
        rows = storage.list_appointment_details(company_id, **_list_filters(request))
        return JsonResponse(
            [appointment.to_json(client=client, property=prop) for appointment, client, prop in rows],
            safe=False,
        )

    data = clean_payload(AppointmentForm, parse_json_body(request))
    appointment, client = services.create_appointment(storage, company_id, data, user_id=request.user.id)

    logger.info(f"Appointment {appointment.id} scheduled for client {client.id}")
    return JsonResponse(appointment.to_json(client=client), status=201)


@csrf_exempt
@require_http_methods(["GET", "PUT", "DELETE"])
@api_login_required
@company_required
@api_error_handler({
    'GET': 'Erro ao buscar agendamento',
    'PUT': 'Erro ao atualizar agendamento',
    'DELETE': 'Erro ao deletar agendamento',
})
def appointment_detail_view(request, pk):
    storage = get_storage()
    company_id = get_user_company(request)

    if request.method == 'GET':
        appointment = storage.get_appointment(company_id, pk)
        return JsonResponse(appointment.to_json(client=storage.get_client(company_id, appointment.client_id)))

    if request.method == 'PUT':
        # Unknown appointment is a 404 before any body validation
        storage.get_appointment(company_id, pk)
        data = clean_payload(AppointmentForm, parse_json_body(request), partial=True)
        appointment, client = services.update_appointment(storage, company_id, pk, data, user_id=request.user.id)
        return JsonResponse(appointment.to_json(client=client))

    services.delete_appointment(storage, company_id, pk, user_id=request.user.id)
    return HttpResponse(status=204)
