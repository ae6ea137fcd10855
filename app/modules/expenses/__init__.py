# app/modules/expenses/__init__.py
"""
Módulo de Gastos

Registro y mantenimiento de los gastos de la organización:
- Alta de gastos con validación de monto y campos obligatorios
- Listado con recibos asociados
- Actualización parcial
- Eliminación en cascada de recibos

Arquitectura:
- router.py: Endpoints de gastos
- service.py: Reglas de negocio de gastos
- repository.py: Acceso a datos de gastos
- schemas.py: Modelos de request/response
"""

from .router import router
from .service import ExpensesService
from .repository import ExpensesRepository

__all__ = [
    "router",
    "ExpensesService",
    "ExpensesRepository"
]
