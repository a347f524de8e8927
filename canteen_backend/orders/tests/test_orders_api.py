# orders/tests/test_orders_api.py

import shutil
import tempfile
from decimal import Decimal

from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from cart.services import cart_service
from core.tests.factories import make_product, make_stand, make_student
from orders.models import Order

MEDIA_ROOT = tempfile.mkdtemp(prefix="canteen-test-media-")


@override_settings(MEDIA_ROOT=MEDIA_ROOT)
class BuyerOrderAPITests(TestCase):
    @classmethod
    def tearDownClass(cls):
        super().tearDownClass()
        shutil.rmtree(MEDIA_ROOT, ignore_errors=True)

    def setUp(self):
        self.client = APIClient()
        self.stand = make_stand(store_name="Warung A", qris="QR-A")
        self.product = make_product(stand=self.stand, price="10000", discount=10, stock=5)
        self.student = make_student(balance="30000")
        self.client.force_authenticate(user=self.student)

    def _checkout(self, payment_method, **extra):
        cart_service.add_item(user=self.student, product_id=self.product.id, quantity=1)
        return self.client.post(
            reverse("orders:checkout"),
            {"payment_method": payment_method, **extra},
            format="json",
        )

    # =====================================================
    # CHECKOUT
    # =====================================================

    def test_checkout_card(self):
        response = self._checkout("card")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["order"]["status"], "request")
        self.assertEqual(response.data["order"]["total_amount"], "9000.00")
        self.assertNotIn("qris_code", response.data)

    def test_checkout_qris_returns_code(self):
        response = self._checkout("qris")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["order"]["status"], "payment_pending")
        self.assertEqual(response.data["qris_code"]["qris_code"], "QR-A")

    def test_checkout_cash_short(self):
        response = self._checkout("cash", cash_amount="100")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"]["code"], "INSUFFICIENT_CASH")

    def test_checkout_bad_method(self):
        response = self._checkout("voucher")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"]["code"], "INVALID_PAYMENT_METHOD")

    def test_checkout_empty_cart(self):
        response = self.client.post(reverse("orders:checkout"), {"payment_method": "card"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"]["code"], "EMPTY_CART")

    def test_checkout_insufficient_stock(self):
        cart_service.add_item(user=self.student, product_id=self.product.id, quantity=5)
        self.product.stock = 2
        self.product.save()

        response = self.client.post(reverse("orders:checkout"), {"payment_method": "qris"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["error"]["code"], "INSUFFICIENT_STOCK")
        self.assertEqual(response.data["error"]["details"]["product_name"], self.product.name)

    # =====================================================
    # DIRECT ORDER + QUERIES
    # =====================================================

    def test_place_multi_stand_order(self):
        other = make_product(stand=make_stand(store_name="Warung B"), name="Bakso", price="5000")

        response = self.client.post(
            reverse("orders:list"),
            {
                "payment_method": "qris",
                "items": [
                    {"product_id": str(self.product.id), "quantity": 1},
                    {"product_id": str(other.id), "quantity": 1},
                ],
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(len(response.data["orders"]), 2)

        listing = self.client.get(reverse("orders:list"))
        self.assertEqual(listing.status_code, status.HTTP_200_OK)
        self.assertEqual(listing.data["count"], 2)

    def test_detail_and_cancel(self):
        order_id = self._checkout("qris").data["order"]["id"]

        detail = self.client.get(reverse("orders:detail", kwargs={"order_id": order_id}))
        self.assertEqual(detail.status_code, status.HTTP_200_OK)
        self.assertEqual(len(detail.data["items"]), 1)

        cancel = self.client.post(reverse("orders:cancel", kwargs={"order_id": order_id}))
        self.assertEqual(cancel.status_code, status.HTTP_200_OK)
        self.assertEqual(cancel.data["status"], "cancelled")

        gone = self.client.get(reverse("orders:detail", kwargs={"order_id": order_id}))
        self.assertEqual(gone.status_code, status.HTTP_404_NOT_FOUND)

    def test_other_buyers_order_is_not_found(self):
        order_id = self._checkout("qris").data["order"]["id"]
        self.client.force_authenticate(user=make_student())

        response = self.client.get(reverse("orders:detail", kwargs={"order_id": order_id}))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["error"]["code"], "NOT_FOUND")

    def test_qris_for_order(self):
        order_id = self._checkout("qris").data["order"]["id"]

        response = self.client.get(reverse("orders:qris", kwargs={"order_id": order_id}))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["qris_code"], "QR-A")
        self.assertEqual(response.data["order_id"], order_id)

    # =====================================================
    # PAYMENT PROOF UPLOAD
    # =====================================================

    def test_upload_payment_proof(self):
        order_id = self._checkout("qris").data["order"]["id"]
        upload = SimpleUploadedFile("proof.png", b"\x89PNG fake image bytes", content_type="image/png")

        response = self.client.post(
            reverse("orders:payment-proof", kwargs={"order_id": order_id}),
            {"payment_proof": upload},
            format="multipart",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], "request")
        self.assertIn("payment_proofs/", response.data["payment_proof_url"])

        again = self.client.post(
            reverse("orders:payment-proof", kwargs={"order_id": order_id}),
            {"payment_proof": SimpleUploadedFile("proof2.png", b"bytes", content_type="image/png")},
            format="multipart",
        )
        self.assertEqual(again.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(again.data["error"]["code"], "ORDER_NOT_ELIGIBLE")

    def test_upload_rejects_non_images(self):
        order_id = self._checkout("qris").data["order"]["id"]

        response = self.client.post(
            reverse("orders:payment-proof", kwargs={"order_id": order_id}),
            {"payment_proof": SimpleUploadedFile("proof.pdf", b"%PDF", content_type="application/pdf")},
            format="multipart",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"]["code"], "VALIDATION_ERROR")
        self.assertEqual(Order.objects.get(pk=order_id).status, Order.STATUS_PAYMENT_PENDING)


class StandOrderAPITests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.stand = make_stand(store_name="Warung A")
        self.product = make_product(stand=self.stand, price="10000", stock=5)
        self.student = make_student(balance="20000")
        self.client.force_authenticate(user=self.stand)

    def _create(self, payment_method="cash", quantity=1):
        return self.client.post(
            reverse("stand_orders:list"),
            {
                "user_id": str(self.student.id),
                "payment_method": payment_method,
                "items": [{"product_id": str(self.product.id), "quantity": quantity}],
            },
            format="json",
        )

    def test_create_card_order_for_buyer(self):
        response = self._create("card", quantity=2)

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["total_amount"], "20000.00")
        self.student.refresh_from_db()
        self.assertEqual(self.student.balance, Decimal("0.00"))

    def test_create_card_order_insufficient_balance(self):
        response = self._create("card", quantity=3)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"]["code"], "INSUFFICIENT_BALANCE")
        self.product.refresh_from_db()
        self.assertEqual(self.product.stock, 5)

    def test_status_update_and_filtering(self):
        order_id = self._create().data["id"]
        self._create()

        response = self.client.patch(
            reverse("stand_orders:status", kwargs={"order_id": order_id}),
            {"status": "cooking"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], "cooking")

        cooking = self.client.get(reverse("stand_orders:list"), {"status": "cooking"})
        self.assertEqual([o["id"] for o in cooking.data["results"]], [order_id])

        pending = self.client.get(reverse("stand_orders:pending"))
        self.assertEqual(pending.data["count"], 2)

    def test_invalid_status(self):
        order_id = self._create().data["id"]

        response = self.client.patch(
            reverse("stand_orders:status", kwargs={"order_id": order_id}),
            {"status": "shipped"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"]["code"], "INVALID_STATUS")

    def test_delete(self):
        order_id = self._create().data["id"]

        response = self.client.delete(reverse("stand_orders:detail", kwargs={"order_id": order_id}))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["deleted"])
        self.assertEqual(
            self.client.get(reverse("stand_orders:detail", kwargs={"order_id": order_id})).status_code,
            status.HTTP_404_NOT_FOUND,
        )

    def test_students_cannot_use_stand_routes(self):
        self.client.force_authenticate(user=self.student)

        response = self.client.get(reverse("stand_orders:list"))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
