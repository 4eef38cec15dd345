# fizzbuzz/serializers.py
from __future__ import annotations

import datetime as dt
import re
from typing import Mapping, Optional, Tuple

import pytz
from django.conf import settings
from django.utils import timezone
from rest_framework import serializers

from .exceptions import ParameterValidationError
from .models import Statistic
from .services import ParameterSet

PARAMETER_NAMES = ("limit", "int1", "int2", "str1", "str2")
INT_PARAMETERS = ("limit", "int1", "int2")
STR_MAX_LENGTH = 64

# Signed 64-bit range, the widest value the statistic columns hold
INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 63 - 1

_NUMERIC_RE = re.compile(r"[-+]?[0-9]+")
_ALPHANUM_RE = re.compile(r"[A-Za-z0-9]+")


def _parse_int(raw: str) -> Tuple[Optional[int], Optional[str]]:
    """
    Return (value, error) for a string already known to be numeric.
    Digits beyond the 64-bit range are rejected before int() sees them.
    """
    digits = raw.lstrip("+-").lstrip("0")
    if len(digits) > len(str(INT_MAX)):
        return None, f"int type parameter is out of range (received:{raw})"
    value = int(raw)
    if value < INT_MIN or value > INT_MAX:
        return None, f"int type parameter is out of range (received:{raw})"
    if value < 1:
        return None, f"int type parameter cannot be less than 1 (received:{raw})"
    return value, None


class RawQueryField(serializers.Field):
    """Query string value passed through untouched; every rule runs in FizzbuzzQuerySerializer.validate()."""
    def to_internal_value(self, data):
        return data if isinstance(data, str) else str(data)

    def to_representation(self, value):
        return value


class FizzbuzzQuerySerializer(serializers.Serializer):
    """
    Validator for the five /list query parameters.
    Notes:
      - Every problem is reported, not only the first one.
      - Messages are ordered: missing parameters, then malformed ones
        (numeric / alphanumeric / length), then integer range problems.
      - A parameter reports at most one problem.
    """
    limit = RawQueryField(required=False)
    int1 = RawQueryField(required=False)
    int2 = RawQueryField(required=False)
    str1 = RawQueryField(required=False)
    str2 = RawQueryField(required=False)

    def validate(self, attrs):
        required, malformed, out_of_range = [], [], []
        values = {}

        for name in PARAMETER_NAMES:
            raw = attrs.get(name) or ""
            if not raw:
                required.append(f"parameter {name} is required")
                continue

            if name in INT_PARAMETERS:
                if not _NUMERIC_RE.fullmatch(raw):
                    malformed.append(f"parameter {name} is not a numeric value (received:{raw})")
                    continue
                value, error = _parse_int(raw)
                if error:
                    out_of_range.append(error)
                    continue
                values[name] = value
            else:
                if not _ALPHANUM_RE.fullmatch(raw):
                    malformed.append(f"parameter {name} is not an alphanumeric value (received:{raw})")
                    continue
                if len(raw) > STR_MAX_LENGTH:
                    malformed.append(
                        f"parameter {name} cannot be over {STR_MAX_LENGTH} characters (received:{raw})"
                    )
                    continue
                values[name] = raw

        errors = required + malformed + out_of_range
        if errors:
            raise serializers.ValidationError(errors)
        return values


def check_params(raw: Mapping[str, str]) -> ParameterSet:
    """Validate raw query parameters, raising ParameterValidationError with all messages joined by newlines."""
    serializer = FizzbuzzQuerySerializer(data={name: raw.get(name) or "" for name in PARAMETER_NAMES})
    if not serializer.is_valid():
        messages = []
        for field_errors in serializer.errors.values():
            messages.extend(str(e) for e in field_errors)
        raise ParameterValidationError("\n".join(messages))
    return ParameterSet(**serializer.validated_data)


class DisplayDateTimeField(serializers.DateTimeField):
    """
    Read-only datetime rendered in FIZZBUZZ_DISPLAY_TZ,
    e.g. "2025-10-27 10:00:00.000000 +0000 UTC".
    """
    def to_representation(self, value):
        if value is None:
            return None
        if timezone.is_naive(value):
            value = timezone.make_aware(value, dt.timezone.utc)
        tz = pytz.timezone(settings.FIZZBUZZ_DISPLAY_TZ)
        return value.astimezone(tz).strftime("%Y-%m-%d %H:%M:%S.%f %z %Z")


class StatisticSerializer(serializers.ModelSerializer):
    created_at = DisplayDateTimeField(read_only=True)
    updated_at = DisplayDateTimeField(read_only=True)

    class Meta:
        model = Statistic
        fields = (
            "id",
            "limit",
            "int1",
            "int2",
            "str1",
            "str2",
            "hits",
            "created_at",
            "updated_at",
        )
        read_only_fields = ("id", "limit", "int1", "int2", "str1", "str2", "hits")
