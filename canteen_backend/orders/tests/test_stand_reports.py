# orders/tests/test_stand_reports.py

"""
STAND REPORT TESTS

GUARANTEES:
- revenue is summed per calendar month over non-cancelled orders
- every month of the year is present, zero-filled
- other stands and other years never leak into a stand's numbers
"""

from datetime import datetime
from decimal import Decimal

from django.test import TestCase
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from core.exceptions import ValidationError
from core.tests.factories import make_product, make_stand, make_student
from orders.models import Order
from orders.services import order_service
from orders.services.checkout_orchestrator import create_stand_order


def _at(year, month, day=15):
    return timezone.make_aware(datetime(year, month, day, 12, 0, 0))


class StandReportTests(TestCase):
    def setUp(self):
        self.stand = make_stand(store_name="Warung A")
        self.other_stand = make_stand(store_name="Warung B")
        self.product = make_product(stand=self.stand, price="10000", stock=50)
        self.other_product = make_product(stand=self.other_stand, price="10000", stock=50)
        self.student = make_student()

    def _order(self, *, when, quantity=1, status=None, stand=None, product=None):
        order = create_stand_order(
            stand=stand or self.stand,
            user_id=self.student.id,
            payment_method="cash",
            items=[{"product_id": (product or self.product).id, "quantity": quantity}],
        ).order
        changes = {"created_at": when}
        if status:
            changes["status"] = status
        Order.objects.filter(pk=order.pk).update(**changes)
        return order

    def _seed_year(self):
        self._order(when=_at(2026, 1), quantity=2, status=Order.STATUS_DONE)
        self._order(when=_at(2026, 3, 2))
        self._order(when=_at(2026, 3, 28), status=Order.STATUS_DONE)
        self._order(when=_at(2026, 3, 20), status=Order.STATUS_CANCELLED)
        self._order(when=_at(2025, 3), quantity=5)
        self._order(when=_at(2026, 3), quantity=4, stand=self.other_stand, product=self.other_product)

    def test_monthly_revenue_recap(self):
        self._seed_year()

        recap = order_service.monthly_revenue_recap(stand=self.stand, year=2026)

        self.assertEqual(recap["year"], 2026)
        self.assertEqual([m["month"] for m in recap["months"]], list(range(1, 13)))

        january, february, march = recap["months"][:3]
        self.assertEqual(january["month_name"], "January")
        self.assertEqual(
            (january["total_orders"], january["completed_orders"], january["total_revenue"]),
            (1, 1, Decimal("20000.00")),
        )
        self.assertEqual((february["total_orders"], february["total_revenue"]), (0, Decimal("0.00")))
        self.assertEqual(
            (march["total_orders"], march["completed_orders"], march["total_revenue"]),
            (2, 1, Decimal("20000.00")),
        )

        self.assertEqual(
            recap["yearly_summary"],
            {"total_orders": 3, "completed_orders": 2, "total_revenue": Decimal("40000.00")},
        )

    def test_soft_deleted_orders_are_left_out(self):
        order = self._order(when=_at(2026, 5))
        order_service.delete_stand_order(stand=self.stand, order_id=order.pk)

        recap = order_service.monthly_revenue_recap(stand=self.stand, year=2026)

        self.assertEqual(recap["months"][4]["total_orders"], 0)
        self.assertEqual(recap["yearly_summary"]["total_revenue"], Decimal("0.00"))

    def test_orders_for_month(self):
        self._seed_year()

        orders, summary = order_service.list_stand_orders_for_month(stand=self.stand, year=2026, month=3)

        self.assertEqual(orders.count(), 3)
        self.assertEqual(summary["total_orders"], 2)
        self.assertEqual(summary["completed_orders"], 1)
        self.assertEqual(summary["pending_orders"], 1)
        self.assertEqual(summary["total_revenue"], Decimal("20000.00"))

    def test_month_out_of_range(self):
        with self.assertRaises(ValidationError):
            order_service.list_stand_orders_for_month(stand=self.stand, year=2026, month=13)


class StandReportAPITests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.stand = make_stand(store_name="Warung A")
        self.product = make_product(stand=self.stand, price="10000", stock=50)
        self.student = make_student()
        self.client.force_authenticate(user=self.stand)

        self.march = self._order(_at(2026, 3, 10))
        self.april = self._order(_at(2026, 4, 10))

    def _order(self, when):
        order = create_stand_order(
            stand=self.stand,
            user_id=self.student.id,
            payment_method="cash",
            items=[{"product_id": self.product.id, "quantity": 1}],
        ).order
        Order.objects.filter(pk=order.pk).update(created_at=when)
        return order

    def test_recap_endpoint(self):
        response = self.client.get(reverse("stand_orders:recap"), {"year": 2026})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data["months"]), 12)
        self.assertEqual(response.data["months"][2]["total_revenue"], Decimal("10000.00"))
        self.assertEqual(response.data["yearly_summary"]["total_orders"], 2)

    def test_monthly_endpoint(self):
        response = self.client.get(reverse("stand_orders:monthly"), {"year": 2026, "month": 4})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([o["id"] for o in response.data["orders"]], [str(self.april.pk)])
        self.assertEqual(response.data["summary"]["total_orders"], 1)

    def test_monthly_endpoint_requires_year_and_month(self):
        response = self.client.get(reverse("stand_orders:monthly"), {"year": 2026})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"]["code"], "VALIDATION_ERROR")
        self.assertIn("month", response.data["error"]["details"])

    def test_created_date_filters(self):
        response = self.client.get(
            reverse("stand_orders:list"),
            {
                "created_from": _at(2026, 4, 1).isoformat(),
                "created_to": _at(2026, 4, 30).isoformat(),
            },
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([o["id"] for o in response.data["results"]], [str(self.april.pk)])

        older = self.client.get(reverse("stand_orders:list"), {"created_to": _at(2026, 3, 31).isoformat()})
        self.assertEqual([o["id"] for o in older.data["results"]], [str(self.march.pk)])

    def test_students_cannot_read_reports(self):
        self.client.force_authenticate(user=make_student())

        response = self.client.get(reverse("stand_orders:recap"))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
