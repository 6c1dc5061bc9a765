"""
Producto routes (Controllers) - Layered Architecture.

This module handles HTTP requests/responses for producto endpoints.
All business logic is delegated to the ProductoService layer.
"""

from fastapi import APIRouter, HTTPException, Query, Depends, status
from typing import List, Optional
from decimal import Decimal
import logging

from models.productos import ProductoDTO, ProductoUpdate, StockUpdate, ResumenInventarioDTO
from models.base import StatusUpdate
from models.common import create_delete_response, create_success_response
from core.pagination import create_paginated_response
from core.exceptions import AppException
from services.interfaces import ProductoServiceInterface
from dependencies import get_producto_service
from routes.common import handle_service_exception
from config import settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/productos", tags=["productos"])


def _internal_error(accion: str, e: Exception) -> HTTPException:
    logger.error(f"Error al {accion}: {e}", exc_info=True)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Error al {accion}"
    )


# ==================== Consultas ====================

@router.get("/")
async def listar_productos(
    page: Optional[int] = Query(None, description="Número de página (1-indexed)"),
    page_size: Optional[int] = Query(
        None,
        le=settings.max_page_size,
        description="Items por página"
    ),
    service: ProductoServiceInterface = Depends(get_producto_service),
):
    """
    List productos.

    Sin `page` ni `page_size` devuelve todos los productos; con alguno de
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
        raise _internal_error("obtener productos", e)


@router.get("/buscar", response_model=List[ProductoDTO])
async def buscar_productos(
    nombre: str = Query(..., description="Texto a buscar en nombre o descripción"),
    service: ProductoServiceInterface = Depends(get_producto_service),
):
    try:
        return service.search_by_nombre(nombre)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        raise _internal_error("buscar productos", e)


@router.get("/stock", response_model=List[ProductoDTO])
async def productos_con_stock(
    stock_minimo: int = Query(1, description="Unidades mínimas"),
    service: ProductoServiceInterface = Depends(get_producto_service),
):
    try:
        return service.get_con_stock(stock_minimo)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        raise _internal_error("obtener productos con stock", e)


@router.get("/sin-stock", response_model=List[ProductoDTO])
async def productos_sin_stock(
    service: ProductoServiceInterface = Depends(get_producto_service),
):
    try:
        return service.get_sin_stock()
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        raise _internal_error("obtener productos sin stock", e)


@router.get("/rango-precio", response_model=List[ProductoDTO])
async def productos_por_rango_precio(
    precio_minimo: Decimal = Query(..., description="Precio mínimo (inclusive)"),
    precio_maximo: Decimal = Query(..., description="Precio máximo (inclusive)"),
    service: ProductoServiceInterface = Depends(get_producto_service),
):
    try:
        return service.get_by_rango_precio(precio_minimo, precio_maximo)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        raise _internal_error("obtener productos por rango de precio", e)


@router.get("/recientes", response_model=List[ProductoDTO])
async def productos_recientes(
    dias: Optional[int] = Query(None, description="Ventana en días"),
    service: ProductoServiceInterface = Depends(get_producto_service),
):
    try:
        return service.get_recientes(dias)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        raise _internal_error("obtener productos recientes", e)


@router.get("/resumen", response_model=ResumenInventarioDTO)
async def resumen_inventario(
    solo_activos: bool = Query(True),
    service: ProductoServiceInterface = Depends(get_producto_service),
):
    """Totales del inventario: cantidad de productos, unidades y valor."""
    try:
        return service.get_resumen_inventario(solo_activos)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        raise _internal_error("calcular resumen de inventario", e)


@router.get("/validate-nombre")
async def validar_nombre(
    nombre: str = Query(""),
    exclude_id: Optional[int] = Query(None),
    service: ProductoServiceInterface = Depends(get_producto_service),
):
    """Indica si el nombre está disponible."""
    try:
        return {"nombre": nombre, "disponible": service.validate_unique_nombre(nombre, exclude_id)}
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        raise _internal_error("validar nombre", e)


@router.get("/{producto_id}", response_model=ProductoDTO)
async def obtener_producto(
    producto_id: int,
    service: ProductoServiceInterface = Depends(get_producto_service),
):
    try:
        producto = service.get_by_id(producto_id)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        raise _internal_error("obtener producto", e)
    if producto is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Producto no encontrado: {producto_id}"
        )
    return producto


# ==================== Escritura ====================

@router.post("/", response_model=ProductoDTO, status_code=status.HTTP_201_CREATED)
async def crear_producto(
    producto: ProductoDTO,
    service: ProductoServiceInterface = Depends(get_producto_service),
):
    """
    Create a new producto.

    Args:
        producto: Producto data
        service: Injected ProductoService

    Returns:
        Created producto with audit dates
    """
    try:
        return service.create(producto)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        raise _internal_error("crear producto", e)


@router.put("/{producto_id}", response_model=ProductoDTO)
async def actualizar_producto(
    producto_id: int,
    producto: ProductoDTO,
    service: ProductoServiceInterface = Depends(get_producto_service),
):
    if producto.id and producto.id != producto_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="El id del cuerpo no coincide con el de la ruta"
        )
    try:
        return service.update(producto.model_copy(update={"id": producto_id}))
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        raise _internal_error("actualizar producto", e)


@router.patch("/{producto_id}")
async def actualizar_producto_parcial(
    producto_id: int,
    cambios: ProductoUpdate,
    service: ProductoServiceInterface = Depends(get_producto_service),
):
    try:
        service.update_partial(cambios.model_copy(update={"id": producto_id}))
        return create_success_response("Producto actualizado", {"id": producto_id})
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        raise _internal_error("actualizar producto", e)


@router.delete("/{producto_id}")
async def eliminar_producto(
    producto_id: int,
    service: ProductoServiceInterface = Depends(get_producto_service),
):
    try:
        service.delete(producto_id)
        return create_delete_response("Producto eliminado exitosamente", producto_id)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        raise _internal_error("eliminar producto", e)


@router.patch("/{producto_id}/status")
async def cambiar_estado_producto(
    producto_id: int,
    estado: StatusUpdate,
    service: ProductoServiceInterface = Depends(get_producto_service),
):
    try:
        service.set_active(producto_id, estado.status)
        return create_success_response(
            "Producto activado" if estado.status else "Producto desactivado",
            {"id": producto_id, "is_active": estado.status}
        )
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        raise _internal_error("cambiar estado del producto", e)


@router.patch("/{producto_id}/stock")
async def actualizar_stock(
    producto_id: int,
    datos: StockUpdate,
    service: ProductoServiceInterface = Depends(get_producto_service),
):
    """
    Update only the stock of a producto.

    Un stock negativo se rechaza con 400 antes de tocar la base de datos.
    """
    try:
        service.update_stock(producto_id, datos.nuevo_stock)
        return create_success_response(
            "Stock actualizado",
            {"id": producto_id, "stock": datos.nuevo_stock}
        )
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        raise _internal_error("actualizar stock", e)
