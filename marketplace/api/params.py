"""Query-string parsing shared by list endpoints."""

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional

from django.utils.dateparse import parse_date
from rest_framework.exceptions import ValidationError


def query_int(request, name: str, default: Optional[int] = None) -> Optional[int]:
    value = request.query_params.get(name)
    if value in (None, ""):
        return default
    try:
        return int(value)
    except ValueError:
        raise ValidationError({name: "Must be an integer"})


def query_decimal(request, name: str) -> Optional[Decimal]:
    value = request.query_params.get(name)
    if value in (None, ""):
        return None
    try:
        parsed = Decimal(value)
    except InvalidOperation:
        raise ValidationError({name: "Must be a number"})
    if not parsed.is_finite():
        raise ValidationError({name: "Must be a finite number"})
    return parsed


def query_date(request, name: str) -> Optional[date]:
    value = request.query_params.get(name)
    if value in (None, ""):
        return None
    try:
        parsed = parse_date(value)
    except ValueError:
        parsed = None
    if parsed is None:
        raise ValidationError({name: "Must be a date in YYYY-MM-DD format"})
    return parsed
