"""
Cross-app business helpers (references, dashboard KPIs)
"""

from django.utils import timezone

from apps.core.exceptions import InvalidReference, NotFound


REFERENCE_MESSAGES = {
    'client_id': 'Cliente não encontrado para esta empresa',
    'property_id': 'Imóvel não encontrado para esta empresa',
    'contract_id': 'Contrato não encontrado para esta empresa',
}


def check_reference(lookup, company_id, field, pk):
    """
    Resolve a referenced id under the caller's company

    Args:
        lookup: storage getter, e.g. storage.get_client
        company_id: caller's company
        field: payload field name (used in the error map)
        pk: referenced id

    Returns:
        The referenced instance

    Raises:
        InvalidReference: id absent or owned by another company (400, not 404)
    """
    try:
        return lookup(company_id, pk)
    except NotFound:
        raise InvalidReference(field, REFERENCE_MESSAGES.get(field, 'Registro não encontrado para esta empresa'))


def month_bounds(now):
    """[first instant of this month, first instant of next month) in the current time zone"""
    local = timezone.localtime(now)
    start = local.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return start, end


def format_revenue(value):
    """Decimal('45000') → 'R$ 45.0K'"""
    return f"R$ {float(value) / 1000:.1f}K"


def compute_kpis(storage, company_id, now=None):
    """
    Dashboard KPI cards

    Returns:
        dict: activeProperties, activeContracts, monthlyLeads, monthlyRevenue
    """
    month_start, month_end = month_bounds(now or timezone.now())
    counts = storage.dashboard_counts(company_id, month_start, month_end)

    return {
        'activeProperties': counts['active_properties'],
        'activeContracts': counts['active_contracts'],
        'monthlyLeads': counts['monthly_leads'],
        'monthlyRevenue': format_revenue(counts['monthly_revenue']),
    }
