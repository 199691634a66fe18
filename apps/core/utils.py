"""
Helpers shared by the JSON API views
"""
import json
import logging
import re
from datetime import datetime, time
from functools import wraps

from django.db.models import ProtectedError
from django.http import JsonResponse
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from apps.core.exceptions import NotFound, ValidationFailed

logger = logging.getLogger(__name__)


NOT_FOUND_MESSAGES = {
    'company': 'Empresa não encontrada',
    'property': 'Imóvel não encontrado',
    'client': 'Cliente não encontrado',
    'appointment': 'Agendamento não encontrado',
    'contract': 'Contrato não encontrado',
    'transaction': 'Transação não encontrada',
    'construction': 'Obra não encontrada',
    'task': 'Tarefa não encontrada',
    'expense': 'Despesa não encontrada',
}

_CAMEL_BOUNDARY = re.compile(r'(?<!^)(?=[A-Z])')


def get_user_company(request):
    """
    Company id the current request acts for

    Returns:
        int or None (anonymous user or user without company)
    """
    if not request.user.is_authenticated:
        return None
    return request.user.company_id


def to_snake(name):
    """'pipelineValue' → 'pipeline_value'"""
    return _CAMEL_BOUNDARY.sub('_', name).lower()


def to_camel(name):
    """'pipeline_value' → 'pipelineValue'"""
    first, *rest = name.split('_')
    return first + ''.join(part.title() for part in rest)


def snake_case_keys(payload):
    return {to_snake(key): value for key, value in payload.items()}


def camel_case_keys(data):
    return {to_camel(key): value for key, value in data.items()}


def parse_json_body(request):
    """
    Decode the request body as a JSON object

    Raises:
        ValidationFailed: body is not valid JSON or not an object
    """
    if not request.body:
        return {}
    try:
        payload = json.loads(request.body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise ValidationFailed({'body': ['JSON inválido']})

    if not isinstance(payload, dict):
        raise ValidationFailed({'body': ['O corpo da requisição deve ser um objeto JSON']})

    return snake_case_keys(payload)


def parse_limit(value, default):
    """?limit= query parameter; falls back to default when absent or invalid"""
    try:
        limit = int(value)
    except (TypeError, ValueError):
        return default
    return limit if limit > 0 else default


def api_error_handler(error_message):
    """
    Decorator: translate business exceptions into JSON responses

    - ValidationFailed → 400 with the field errors
    - NotFound → 404 (same answer for "absent" and "other company")
    - ProtectedError → 400 (row still referenced by a contract)
    - anything else → logged, 500 with a generic message

    Args:
        error_message: localized message for unexpected failures,
            either a string or a dict keyed by HTTP method
    """

    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            try:
                return view_func(request, *args, **kwargs)

            except ValidationFailed as e:
                return JsonResponse({
                    'message': 'Dados inválidos',
                    'errors': camel_case_keys(e.errors),
                }, status=400)

            except NotFound as e:
                return JsonResponse({
                    'message': NOT_FOUND_MESSAGES.get(e.entity, 'Registro não encontrado'),
                }, status=404)

            except ProtectedError:
                return JsonResponse({
                    'message': 'Registro vinculado a contratos não pode ser removido',
                }, status=400)

            except Exception:
                logger.exception(f"Unexpected error in {view_func.__name__} ({request.method} {request.path})")

                if isinstance(error_message, dict):
                    message = error_message.get(request.method, 'Erro interno do servidor')
                else:
                    message = error_message
                return JsonResponse({'message': message}, status=500)

        return wrapper

    return decorator


def decimal_or_none(value):
    """Decimal columns are sent as strings, the way the front end formats them"""
    return str(value) if value is not None else None


def isoformat_or_none(value):
    return value.isoformat() if value is not None else None


def parse_bool(value):
    return str(value).lower() in ('true', '1', 'yes')


def parse_datetime_param(value, field='date', end_of_day=False):
    """
    ?fromDate= / ?toDate= query parameter

    Accepts an ISO datetime or a plain date; a plain date means the start
    of that day, or its last instant when end_of_day is set (inclusive
    upper bound).

    Raises:
        ValidationFailed: value is not a date
    """
    if not value:
        return None

    # Plain dates first: parse_datetime also accepts "YYYY-MM-DD" as midnight
    try:
        day = parse_date(value)
    except ValueError:
        day = None

    if day is not None:
        parsed = datetime.combine(day, time.max if end_of_day else time.min)
    else:
        try:
            parsed = parse_datetime(value)
        except ValueError:
            parsed = None
        if parsed is None:
            raise ValidationFailed({field: [f"Data inválida: {value}"]})

    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed)
    return parsed
