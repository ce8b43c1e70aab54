"""
User-facing notifications for store operations.

Stores return typed results; this module decides what the dashboard user
is told. Each operation produces exactly one notification.
"""
from typing import Any, Dict, Optional, Tuple
from fastapi.encoders import jsonable_encoder
from app.core.results import ErrorKind, OperationResult
from app.schemas.common import Notification, NotificationLevel, StoreResponse


# operation -> (success message, generic error message)
OPERATION_MESSAGES: Dict[str, Tuple[str, str]] = {
    "login": ("¡Bienvenido a Sur Innova!", "Credenciales inválidas"),
    "logout": ("Sesión cerrada", "Error al cerrar sesión"),
    "fetch_products": ("Productos actualizados", "Error al cargar productos"),
    "add_product": ("Producto agregado exitosamente", "Error al agregar producto"),
    "update_product": ("Producto actualizado exitosamente", "Error al actualizar producto"),
    "delete_product": ("Producto eliminado exitosamente", "Error al eliminar producto"),
    "update_stock": ("Producto actualizado exitosamente", "Error al actualizar producto"),
    "fetch_movements": ("Movimientos actualizados", "Error al cargar movimientos"),
    "register_movement": ("Movimiento registrado exitosamente", "Error al registrar movimiento"),
    "fetch_orders": ("Órdenes actualizadas", "Error al cargar órdenes"),
    "create_order": ("Orden creada exitosamente", "Error al crear orden"),
    "update_order_status": ("Estado de orden actualizado", "Error al actualizar estado"),
    "fetch_users": ("Usuarios actualizados", "Error al cargar usuarios"),
    "add_user": ("Usuario agregado exitosamente", "Error al agregar usuario"),
    "update_user": ("Usuario actualizado exitosamente", "Error al actualizar usuario"),
    "delete_user": ("Usuario eliminado exitosamente", "Error al eliminar usuario"),
    "register_user": ("Usuario registrado exitosamente", "Error al registrar usuario"),
    "refresh_dashboard": ("Panel actualizado", "Error al actualizar el panel"),
}

# Messages that replace the generic error for specific error kinds
ERROR_KIND_MESSAGES: Dict[ErrorKind, str] = {
    ErrorKind.INSUFFICIENT_STOCK: "Stock insuficiente",
    ErrorKind.NOT_FOUND: "Registro no encontrado",
}


def notification_for(operation: str, result: OperationResult) -> Notification:
    """
    Build the notification for an operation result.

    Args:
        operation: Store operation name
        result: Result returned by the store

    Returns:
        Success or error notification
    """
    success_message, error_message = OPERATION_MESSAGES.get(
        operation, ("Operación realizada", "Error en la operación")
    )
    if result.success:
        return Notification(level=NotificationLevel.SUCCESS, message=success_message)

    message = ERROR_KIND_MESSAGES.get(result.error, error_message)
    return Notification(level=NotificationLevel.ERROR, message=message)


def error_notification(operation: str, message: Optional[str] = None) -> Notification:
    """Error notification for failures raised rather than returned (login)."""
    _, error_message = OPERATION_MESSAGES.get(operation, ("", "Error en la operación"))
    return Notification(level=NotificationLevel.ERROR, message=message or error_message)


def build_store_response(operation: str, result: OperationResult, data: Any = None) -> StoreResponse:
    """
    Wrap a store result for the dashboard.

    Args:
        operation: Store operation name
        result: Result returned by the store
        data: Payload to return instead of result.data

    Returns:
        StoreResponse with its notification
    """
    notification = notification_for(operation, result)
    payload = data if data is not None else result.data
    return StoreResponse(
        success=result.success,
        message=notification.message,
        notification=notification,
        error=result.error.value if result.error else None,
        data=jsonable_encoder(payload, by_alias=True) if payload is not None else None
    )
