# app/shared/schemas/common.py
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Any, Dict, Iterable, Optional


class CamelModel(BaseModel):
    """Base para schemas expuestos en JSON con llaves camelCase"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorResponse(BaseModel):
    error: str
    details: Optional[Any] = None


def supplied_fields(patch: BaseModel, required: Iterable[str]) -> Dict[str, Any]:
    """
    Campos enviados explícitamente en una actualización parcial.

    Las columnas obligatorias no se pueden vaciar: un valor vacío, cero o null
    en ellas se trata como no enviado y se conserva el valor guardado. Las
    columnas opcionales sí aceptan null para limpiarse.
    """
    required = set(required)
    updates = patch.model_dump(exclude_unset=True)
    return {
        field: value
        for field, value in updates.items()
        if field not in required or value
    }
