import uuid

from django.test import SimpleTestCase
from rest_framework import exceptions as drf_exceptions

from core.api import canteen_exception_handler
from core.exceptions import (
    EmptyCartError,
    InsufficientBalanceError,
    PersistenceError,
    StandMismatchError,
    StockError,
)


class ExceptionHandlerTests(SimpleTestCase):
    """
    Every failure renders as {"error": {"code", "message", "details"?}}.
    """

    def test_domain_error_uses_its_code_and_status(self):
        response = canteen_exception_handler(EmptyCartError(), {})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data, {"error": {"code": "EMPTY_CART", "message": "Cart is empty"}})

    def test_stand_mismatch_carries_both_stands(self):
        current, requested = uuid.uuid4(), uuid.uuid4()
        response = canteen_exception_handler(
            StandMismatchError(current_stand_id=current, requested_stand_id=requested),
            {},
        )

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.data["error"]["code"], "STAND_MISMATCH")
        self.assertEqual(
            response.data["error"]["details"],
            {"current_stand": str(current), "requested_stand": str(requested)},
        )

    def test_stock_error_names_the_product(self):
        response = canteen_exception_handler(StockError("Es Teh"), {})

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.data["error"]["message"], "Insufficient stock for product: Es Teh")
        self.assertEqual(response.data["error"]["details"], {"product_name": "Es Teh"})

    def test_balance_error_is_a_400(self):
        response = canteen_exception_handler(InsufficientBalanceError(), {})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"]["code"], "INSUFFICIENT_BALANCE")

    def test_persistence_error_is_generic(self):
        with self.assertLogs("core.api", level="ERROR"):
            response = canteen_exception_handler(PersistenceError(), {})

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.data["error"]["code"], "PERSISTENCE_ERROR")
        self.assertNotIn("details", response.data["error"])

    def test_drf_validation_error_is_normalized(self):
        response = canteen_exception_handler(
            drf_exceptions.ValidationError({"quantity": ["A valid integer is required."]}),
            {},
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"]["code"], "VALIDATION_ERROR")
        self.assertIn("quantity", response.data["error"]["details"])

    def test_drf_not_found_is_normalized(self):
        response = canteen_exception_handler(drf_exceptions.NotFound(), {})

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["error"]["code"], "NOT_FOUND")
        self.assertNotIn("details", response.data["error"])
