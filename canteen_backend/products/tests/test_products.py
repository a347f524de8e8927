# products/tests/test_products.py

from decimal import Decimal

from django.db import IntegrityError, transaction
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from core.tests.factories import make_product, make_stand, make_student
from orders.services.checkout_orchestrator import place_order
from products.models import Product


class ProductModelTests(TestCase):
    def setUp(self):
        self.stand = make_stand()

    def test_effective_price_applies_discount(self):
        product = make_product(stand=self.stand, price="10000", discount=10)

        self.assertEqual(product.effective_price, Decimal("9000.00"))
        self.assertEqual(product.effective_price * 3, Decimal("27000.00"))

    def test_no_discount_keeps_price(self):
        product = make_product(stand=self.stand, price="7500", discount=0)
        self.assertEqual(product.effective_price, Decimal("7500.00"))

    def test_discount_above_100_is_rejected_by_db(self):
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                make_product(stand=self.stand, discount=150)


class ProductAPITests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.client.force_authenticate(user=make_student())
        self.stand_a = make_stand(store_name="Warung A")
        self.stand_b = make_stand(store_name="Warung B")
        make_product(stand=self.stand_a, name="Nasi Goreng", price="10000", discount=10)
        make_product(stand=self.stand_b, name="Bakso")
        make_product(stand=self.stand_a, name="Hidden", is_active=False)

    def test_lists_active_products(self):
        response = self.client.get(reverse("products-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        names = [p["name"] for p in response.data["results"]]
        self.assertEqual(names, ["Bakso", "Nasi Goreng"])

    def test_filter_by_stand(self):
        response = self.client.get(reverse("products-list"), {"stand": str(self.stand_a.id)})

        self.assertEqual([p["name"] for p in response.data["results"]], ["Nasi Goreng"])
        self.assertEqual(response.data["results"][0]["effective_price"], "9000.00")
        self.assertFalse(Product.objects.get(name="Hidden").is_active)


class StandProductAPITests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.stand = make_stand(store_name="Warung A")
        self.other_stand = make_stand(store_name="Warung B")
        self.product = make_product(stand=self.stand, name="Mie Ayam", price="12000", stock=3)
        self.foreign = make_product(stand=self.other_stand, name="Bakso")
        self.client.force_authenticate(user=self.stand)

    def test_create_product_for_calling_stand(self):
        response = self.client.post(
            reverse("stand-products-list"),
            {"name": "Es Teh", "price": "3000", "discount": 0, "stock": 40, "stand": str(self.other_stand.id)},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["stand_id"], str(self.stand.id))
        self.assertTrue(Product.objects.filter(name="Es Teh", stand=self.stand).exists())

    def test_create_rejects_bad_price_and_discount(self):
        response = self.client.post(
            reverse("stand-products-list"),
            {"name": "Es Teh", "price": "0", "discount": 120, "stock": 1},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"]["code"], "VALIDATION_ERROR")
        self.assertIn("price", response.data["error"]["details"])
        self.assertIn("discount", response.data["error"]["details"])

    def test_restock_and_reprice(self):
        response = self.client.patch(
            reverse("stand-products-detail", kwargs={"pk": self.product.id}),
            {"stock": 25, "price": "15000", "discount": 20},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["effective_price"], "12000.00")
        self.product.refresh_from_db()
        self.assertEqual(self.product.stock, 25)
        self.assertEqual(self.product.price, Decimal("15000.00"))

    def test_toggle_availability_hides_from_catalog(self):
        response = self.client.patch(
            reverse("stand-products-set-status", kwargs={"pk": self.product.id}),
            {"is_active": False},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data["is_active"])

        own = self.client.get(reverse("stand-products-list"))
        self.assertEqual(own.data["count"], 1)

        self.client.force_authenticate(user=make_student())
        catalog = self.client.get(reverse("products-list"), {"stand": str(self.stand.id)})
        self.assertEqual(catalog.data["count"], 0)

    def test_other_stands_products_are_not_found(self):
        patch = self.client.patch(
            reverse("stand-products-detail", kwargs={"pk": self.foreign.id}),
            {"stock": 0},
            format="json",
        )
        delete = self.client.delete(reverse("stand-products-detail", kwargs={"pk": self.foreign.id}))

        self.assertEqual(patch.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(delete.status_code, status.HTTP_404_NOT_FOUND)
        self.foreign.refresh_from_db()
        self.assertEqual(self.foreign.stock, 10)

    def test_delete_unordered_product(self):
        response = self.client.delete(reverse("stand-products-detail", kwargs={"pk": self.product.id}))

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Product.objects.filter(pk=self.product.id).exists())

    def test_ordered_product_cannot_be_deleted(self):
        place_order(
            user=make_student(),
            payment_method="cash",
            items=[{"product_id": self.product.id, "quantity": 1}],
        )

        response = self.client.delete(reverse("stand-products-detail", kwargs={"pk": self.product.id}))

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["error"]["code"], "CONFLICT")
        self.assertTrue(Product.objects.filter(pk=self.product.id).exists())

    def test_students_cannot_manage_products(self):
        self.client.force_authenticate(user=make_student())

        response = self.client.post(
            reverse("stand-products-list"),
            {"name": "Es Teh", "price": "3000", "stock": 1},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(Product.objects.filter(name="Es Teh").exists())
