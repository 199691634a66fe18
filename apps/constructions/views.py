from django.http import HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from apps.accounts.decorators import api_login_required, company_required
from apps.core.forms import clean_payload
from apps.core.storage import get_storage
from apps.core.utils import api_error_handler, decimal_or_none, get_user_company, parse_json_body

from . import services
from .forms import ConstructionForm, ExpenseForm, TaskForm


def _construction_summary(construction, prop, stats):
    data = construction.to_json()
    data['property'] = {'id': prop.id, 'title': prop.title} if prop is not None else None
    data['taskCount'] = stats['task_count']
    data['completedTasks'] = stats['completed_tasks']
    data['expenseTotal'] = decimal_or_none(stats['expense_total'])
    return data


# ==================== Constructions ====================

@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_login_required
@company_required
@api_error_handler({'GET': 'Erro ao buscar obras', 'POST': 'Erro ao criar obra'})
def construction_list_view(request):
    storage = get_storage()
    company_id = get_user_company(request)

    if request.method == 'GET':
        rows = storage.list_construction_details(company_id)
        return JsonResponse([_construction_summary(*row) for row in rows], safe=False)

    data = clean_payload(ConstructionForm, parse_json_body(request))
    construction = services.create_construction(storage, company_id, data, user_id=request.user.id)
    return JsonResponse(construction.to_json(), status=201)


@csrf_exempt
@require_http_methods(["GET", "PUT", "DELETE"])
@api_login_required
@company_required
@api_error_handler({
    'GET': 'Erro ao buscar obra',
    'PUT': 'Erro ao atualizar obra',
    'DELETE': 'Erro ao deletar obra',
})
def construction_detail_view(request, pk):
    storage = get_storage()
    company_id = get_user_company(request)

    if request.method == 'GET':
        return JsonResponse(storage.get_construction(company_id, pk).to_json())

    if request.method == 'PUT':
        storage.get_construction(company_id, pk)
        data = clean_payload(ConstructionForm, parse_json_body(request), partial=True)
        construction = services.update_construction(storage, company_id, pk, data)
        return JsonResponse(construction.to_json())

    storage.delete_construction(company_id, pk)
    return HttpResponse(status=204)


# ==================== Tasks ====================

@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_login_required
@company_required
@api_error_handler({'GET': 'Erro ao buscar tarefas', 'POST': 'Erro ao criar tarefa'})
def task_list_view(request, pk):
    storage = get_storage()
    company_id = get_user_company(request)

    if request.method == 'GET':
        return JsonResponse([task.to_json() for task in storage.list_tasks(company_id, pk)], safe=False)

    storage.get_construction(company_id, pk)
    data = clean_payload(TaskForm, parse_json_body(request))
    task = storage.create_task(company_id, pk, data)
    return JsonResponse(task.to_json(), status=201)


@csrf_exempt
@require_http_methods(["GET", "PUT", "DELETE"])
@api_login_required
@company_required
@api_error_handler({
    'GET': 'Erro ao buscar tarefa',
    'PUT': 'Erro ao atualizar tarefa',
    'DELETE': 'Erro ao deletar tarefa',
})
def task_detail_view(request, pk, task_id):
    storage = get_storage()
    company_id = get_user_company(request)

    if request.method == 'GET':
        return JsonResponse(storage.get_task(company_id, pk, task_id).to_json())

    if request.method == 'PUT':
        storage.get_task(company_id, pk, task_id)
        data = clean_payload(TaskForm, parse_json_body(request), partial=True)
        return JsonResponse(storage.update_task(company_id, pk, task_id, data).to_json())

    storage.delete_task(company_id, pk, task_id)
    return HttpResponse(status=204)


# ==================== Expenses ====================

@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_login_required
@company_required
@api_error_handler({'GET': 'Erro ao buscar despesas', 'POST': 'Erro ao criar despesa'})
def expense_list_view(request, pk):
    storage = get_storage()
    company_id = get_user_company(request)

    if request.method == 'GET':
        return JsonResponse([expense.to_json() for expense in storage.list_expenses(company_id, pk)], safe=False)

    storage.get_construction(company_id, pk)
    data = clean_payload(ExpenseForm, parse_json_body(request))
    expense = storage.create_expense(company_id, pk, data)
    return JsonResponse(expense.to_json(), status=201)


@csrf_exempt
@require_http_methods(["GET", "PUT", "DELETE"])
@api_login_required
@company_required
@api_error_handler({
    'GET': 'Erro ao buscar despesa',
    'PUT': 'Erro ao atualizar despesa',
    'DELETE': 'Erro ao deletar despesa',
})
def expense_detail_view(request, pk, expense_id):
    storage = get_storage()
    company_id = get_user_company(request)

    if request.method == 'GET':
        return JsonResponse(storage.get_expense(company_id, pk, expense_id).to_json())

    if request.method == 'PUT':
        storage.get_expense(company_id, pk, expense_id)
        data = clean_payload(ExpenseForm, parse_json_body(request), partial=True)
        return JsonResponse(storage.update_expense(company_id, pk, expense_id, data).to_json())

    storage.delete_expense(company_id, pk, expense_id)
    return HttpResponse(status=204)
