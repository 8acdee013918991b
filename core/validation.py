from __future__ import annotations

from typing import Any, Dict, List, Optional, Type

from rest_framework import serializers

from core.errors import ValidationFailed


def _flatten(detail: Any) -> List[str]:
    if isinstance(detail, dict):
        out: List[str] = []
        for value in detail.values():
            out.extend(_flatten(value))
        return out
    if isinstance(detail, (list, tuple)):
        out = []
        for value in detail:
            out.extend(_flatten(value))
        return out
    return [str(detail)]


def validate_with_serializer(
    serializer_class: Type[serializers.Serializer],
    data: Dict[str, Any],
    *,
    partial: bool = False,
    instance: Optional[Any] = None,
    context: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Run *data* through *serializer_class* and return the validated data.
    Every failure message is collected into a single ValidationFailed.
    """
    serializer = serializer_class(instance=instance, data=data, partial=partial, context=context or {})
    if not serializer.is_valid():
        raise ValidationFailed(_flatten(serializer.errors))
    return serializer.validated_data
