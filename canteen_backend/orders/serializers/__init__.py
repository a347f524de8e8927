from .order import OrderItemSerializer, OrderSerializer
from .inputs import (
    CheckoutInputSerializer,
    MonthQuerySerializer,
    OrderItemInputSerializer,
    PaymentProofInputSerializer,
    PlaceOrderInputSerializer,
    StandOrderInputSerializer,
    UpdateStatusInputSerializer,
    YearQuerySerializer,
)

__all__ = [
    "OrderSerializer",
    "OrderItemSerializer",
    "CheckoutInputSerializer",
    "OrderItemInputSerializer",
    "PaymentProofInputSerializer",
    "PlaceOrderInputSerializer",
    "StandOrderInputSerializer",
    "UpdateStatusInputSerializer",
    "MonthQuerySerializer",
    "YearQuerySerializer",
]
