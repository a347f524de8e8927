# cart/tests/test_cart_service.py

from decimal import Decimal

from django.test import TestCase

from cart.models import Cart, CartItem
from cart.services import cart_service
from core.exceptions import InvalidQuantityError, NotFoundError, StandMismatchError, StockError
from core.tests.factories import make_product, make_stand, make_student


class CartReadTests(TestCase):
    def test_get_cart_does_not_create_a_row(self):
        student = make_student()

        cart = cart_service.get_cart(student)

        self.assertTrue(cart._state.adding)
        self.assertEqual(cart.total_items, 0)
        self.assertEqual(cart.total_price, Decimal("0.00"))
        self.assertFalse(Cart.objects.filter(user=student).exists())

    def test_clear_without_cart_is_a_noop(self):
        student = make_student()

        cart = cart_service.clear_cart(student)

        self.assertEqual(cart.total_items, 0)
        self.assertFalse(Cart.objects.filter(user=student).exists())


class CartMutationTests(TestCase):
    """
    GUARANTEES:
    - totals always equal the sum over current items
    - one stand per cart
    - price is snapshotted with the discount applied
    """

    def setUp(self):
        self.student = make_student()
        self.stand = make_stand(store_name="Warung A")
        self.nasi = make_product(stand=self.stand, name="Nasi Goreng", price="10000", discount=10, stock=10)
        self.teh = make_product(stand=self.stand, name="Es Teh", price="3000", stock=10)

    # =====================================================
    # ADD
    # =====================================================

    def test_add_applies_discount_and_creates_cart_lazily(self):
        cart = cart_service.add_item(user=self.student, product_id=self.nasi.id, quantity=3)

        item = CartItem.objects.get(cart=cart, product=self.nasi)
        self.assertEqual(item.price, Decimal("9000.00"))
        self.assertEqual(item.subtotal, Decimal("27000.00"))
        self.assertEqual(item.stand_id, self.stand.id)

        cart.refresh_from_db()
        self.assertEqual(cart.total_items, 3)
        self.assertEqual(cart.total_price, Decimal("27000.00"))

    def test_re_adding_merges_at_stored_price(self):
        cart_service.add_item(user=self.student, product_id=self.nasi.id, quantity=1)

        self.nasi.price = Decimal("20000.00")
        self.nasi.save()

        cart = cart_service.add_item(user=self.student, product_id=self.nasi.id, quantity=2)

        item = CartItem.objects.get(cart=cart, product=self.nasi)
        self.assertEqual(item.quantity, 3)
        self.assertEqual(item.price, Decimal("9000.00"))
        self.assertEqual(item.subtotal, Decimal("27000.00"))
        self.assertEqual(CartItem.objects.filter(cart=cart).count(), 1)

    def test_totals_are_recomputed_across_mutations(self):
        cart_service.add_item(user=self.student, product_id=self.nasi.id, quantity=2)
        cart = cart_service.add_item(user=self.student, product_id=self.teh.id, quantity=4)

        teh_item = CartItem.objects.get(cart=cart, product=self.teh)
        cart = cart_service.update_item(user=self.student, item_id=teh_item.id, quantity=1)

        items = list(CartItem.objects.filter(cart=cart))
        cart.refresh_from_db()
        self.assertEqual(cart.total_items, sum(i.quantity for i in items))
        self.assertEqual(cart.total_price, sum((i.subtotal for i in items), Decimal("0.00")))
        self.assertEqual(cart.total_price, Decimal("21000.00"))

        cart = cart_service.remove_item(user=self.student, item_id=teh_item.id)
        cart.refresh_from_db()
        self.assertEqual(cart.total_items, 2)
        self.assertEqual(cart.total_price, Decimal("18000.00"))

    def test_add_rejects_other_stand(self):
        other_stand = make_stand(store_name="Warung B")
        bakso = make_product(stand=other_stand, name="Bakso")

        cart_service.add_item(user=self.student, product_id=self.nasi.id, quantity=1)

        with self.assertRaises(StandMismatchError) as ctx:
            cart_service.add_item(user=self.student, product_id=bakso.id, quantity=1)

        self.assertEqual(ctx.exception.current_stand_id, self.stand.id)
        self.assertEqual(ctx.exception.requested_stand_id, other_stand.id)
        self.assertFalse(CartItem.objects.filter(product=bakso).exists())

    def test_add_rejects_when_stock_is_short(self):
        with self.assertRaises(StockError):
            cart_service.add_item(user=self.student, product_id=self.teh.id, quantity=11)

    def test_add_rejects_inactive_or_unknown_product(self):
        self.teh.is_active = False
        self.teh.save()

        with self.assertRaises(NotFoundError):
            cart_service.add_item(user=self.student, product_id=self.teh.id, quantity=1)

    def test_add_rejects_non_positive_quantity(self):
        with self.assertRaises(InvalidQuantityError):
            cart_service.add_item(user=self.student, product_id=self.teh.id, quantity=0)

    # =====================================================
    # UPDATE / REMOVE / CLEAR
    # =====================================================

    def test_update_checks_stock(self):
        cart = cart_service.add_item(user=self.student, product_id=self.teh.id, quantity=1)
        item = CartItem.objects.get(cart=cart)

        with self.assertRaises(StockError):
            cart_service.update_item(user=self.student, item_id=item.id, quantity=50)

        item.refresh_from_db()
        self.assertEqual(item.quantity, 1)

    def test_update_unknown_item_is_not_found(self):
        cart_service.add_item(user=self.student, product_id=self.teh.id, quantity=1)

        with self.assertRaises(NotFoundError):
            cart_service.update_item(user=self.student, item_id=self.nasi.id, quantity=1)

    def test_remove_without_cart_is_not_found(self):
        with self.assertRaises(NotFoundError):
            cart_service.remove_item(user=self.student, item_id=self.nasi.id)

    def test_clear_empties_items_and_zeroes_totals(self):
        cart_service.add_item(user=self.student, product_id=self.nasi.id, quantity=2)

        cart = cart_service.clear_cart(self.student)

        self.assertEqual(CartItem.objects.filter(cart=cart).count(), 0)
        cart.refresh_from_db()
        self.assertEqual(cart.total_items, 0)
        self.assertEqual(cart.total_price, Decimal("0.00"))

    def test_after_clear_another_stand_is_allowed(self):
        other_stand = make_stand(store_name="Warung B")
        bakso = make_product(stand=other_stand, name="Bakso")

        cart_service.add_item(user=self.student, product_id=self.nasi.id, quantity=1)
        cart_service.clear_cart(self.student)
        cart = cart_service.add_item(user=self.student, product_id=bakso.id, quantity=1)

        self.assertEqual(cart.stand_id, other_stand.id)
