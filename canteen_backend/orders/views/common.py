# orders/views/common.py

from orders.serializers import OrderSerializer


def render_order(order, qris=None) -> dict:
    data = OrderSerializer(order).data
    if qris:
        data["qris_code"] = qris
    return data


def render_result(result) -> list[dict]:
    return [render_order(order, result.qris_for(order)) for order in result.orders]
