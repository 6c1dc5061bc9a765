"""
Cliente routes (Controllers) - Layered Architecture.

This module handles HTTP requests/responses for cliente endpoints.
All business logic is delegated to the ClienteService layer.

Responsibilities:
- Parse HTTP requests
- Delegate to service layer
- Format HTTP responses
- Handle errors and status codes
"""

from fastapi import APIRouter, HTTPException, Query, Depends, status
from typing import List, Optional
import logging

from models.clientes import ClienteDTO, ClienteUpdate
from models.base import StatusUpdate
from models.common import create_delete_response, create_success_response
from core.pagination import create_paginated_response
from core.exceptions import AppException
from services.interfaces import ClienteServiceInterface
from dependencies import get_cliente_service
from routes.common import handle_service_exception
from config import settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clientes", tags=["clientes"])


# ==================== Consultas ====================

@router.get("/")
async def listar_clientes(
    page: Optional[int] = Query(None, description="Número de página (1-indexed)"),
    page_size: Optional[int] = Query(
        None,
        le=settings.max_page_size,
        description="Items por página"
    ),
    service: ClienteServiceInterface = Depends(get_cliente_service),
):
    """
    List clientes.

    Sin `page` ni `page_size` devuelve todos los clientes; con alguno de
    ellos devuelve la respuesta paginada.
    """
    try:
        if page is None and page_size is None:
            return service.get_all()
        items, total = service.get_paged(page or 1, page_size or 0)
        return create_paginated_response(items, page, page_size, total)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        logger.error(f"Error getting clientes: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al obtener clientes"
        )


@router.get("/buscar/email", response_model=ClienteDTO)
async def buscar_por_email(
    email: str = Query(..., description="Email exacto"),
    service: ClienteServiceInterface = Depends(get_cliente_service),
):
    try:
        cliente = service.get_by_email(email)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        logger.error(f"Error searching cliente by email: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al buscar cliente"
        )
    if cliente is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cliente no encontrado")
    return cliente


@router.get("/buscar/nombre", response_model=List[ClienteDTO])
async def buscar_por_nombre(
    nombre: str = Query(..., description="Texto a buscar en nombre o apellido"),
    service: ClienteServiceInterface = Depends(get_cliente_service),
):
    try:
        return service.search_by_nombre(nombre)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        logger.error(f"Error searching clientes: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al buscar clientes"
        )


@router.get("/recientes", response_model=List[ClienteDTO])
async def clientes_recientes(
    dias: Optional[int] = Query(None, description="Ventana en días"),
    service: ClienteServiceInterface = Depends(get_cliente_service),
):
    try:
        return service.get_recientes(dias)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        logger.error(f"Error getting recent clientes: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al obtener clientes recientes"
        )


@router.get("/validate-email")
async def validar_email(
    email: str = Query(""),
    exclude_id: Optional[int] = Query(None),
    service: ClienteServiceInterface = Depends(get_cliente_service),
):
    """Indica si el email está disponible."""
    try:
        return {"email": email, "disponible": service.validate_unique_email(email, exclude_id)}
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        logger.error(f"Error validating email: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al validar email"
        )


@router.get("/{cliente_id}", response_model=ClienteDTO)
async def obtener_cliente(
    cliente_id: int,
    service: ClienteServiceInterface = Depends(get_cliente_service),
):
    """
    Get a cliente by ID.

    Args:
        cliente_id: Cliente ID
        service: Injected ClienteService

    Returns:
        Cliente
    """
    try:
        cliente = service.get_by_id(cliente_id)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        logger.error(f"Error getting cliente {cliente_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al obtener cliente"
        )
    if cliente is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Cliente no encontrado: {cliente_id}"
        )
    return cliente


# ==================== Escritura ====================

@router.post("/", response_model=ClienteDTO, status_code=status.HTTP_201_CREATED)
async def crear_cliente(
    cliente: ClienteDTO,
    service: ClienteServiceInterface = Depends(get_cliente_service),
):
    """
    Create a new cliente.

    Las fechas de auditoría las asigna el servidor; las recibidas se ignoran.
    """
    try:
        return service.create(cliente)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        logger.error(f"Error creating cliente: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al crear cliente"
        )


@router.put("/{cliente_id}", response_model=ClienteDTO)
async def actualizar_cliente(
    cliente_id: int,
    cliente: ClienteDTO,
    service: ClienteServiceInterface = Depends(get_cliente_service),
):
    """
    Replace all fields of an existing cliente.

    El id del cuerpo, si se envía, debe coincidir con el de la ruta.
    """
    if cliente.id and cliente.id != cliente_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="El id del cuerpo no coincide con el de la ruta"
        )
    try:
        return service.update(cliente.model_copy(update={"id": cliente_id}))
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        logger.error(f"Error updating cliente {cliente_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al actualizar cliente"
        )


@router.patch("/{cliente_id}")
async def actualizar_cliente_parcial(
    cliente_id: int,
    cambios: ClienteUpdate,
    service: ClienteServiceInterface = Depends(get_cliente_service),
):
    """Apply only the fields present in the body."""
    try:
        service.update_partial(cambios.model_copy(update={"id": cliente_id}))
        return create_success_response("Cliente actualizado", {"id": cliente_id})
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        logger.error(f"Error patching cliente {cliente_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al actualizar cliente"
        )


@router.delete("/{cliente_id}")
async def eliminar_cliente(
    cliente_id: int,
    service: ClienteServiceInterface = Depends(get_cliente_service),
):
    """
    Delete a cliente (hard delete).

    Para una baja lógica usar PATCH /clientes/{id}/status.
    """
    try:
        service.delete(cliente_id)
        return create_delete_response("Cliente eliminado exitosamente", cliente_id)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        logger.error(f"Error deleting cliente {cliente_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al eliminar cliente"
        )


@router.patch("/{cliente_id}/status")
async def cambiar_estado_cliente(
    cliente_id: int,
    estado: StatusUpdate,
    service: ClienteServiceInterface = Depends(get_cliente_service),
):
    try:
        service.set_active(cliente_id, estado.status)
        return create_success_response(
            "Cliente activado" if estado.status else "Cliente desactivado",
            {"id": cliente_id, "is_active": estado.status}
        )
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        logger.error(f"Error changing status of cliente {cliente_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al cambiar estado del cliente"
        )
