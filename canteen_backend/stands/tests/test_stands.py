# stands/tests/test_stands.py

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from core.exceptions import NotFoundError
from core.tests.factories import make_stand, make_student
from stands.services.qris import get_qris_for_stand, qris_payload


class QRISServiceTests(TestCase):
    def test_configured_stand(self):
        stand = make_stand(store_name="Warung A", qris="000201010212")

        self.assertEqual(
            get_qris_for_stand(stand.id),
            {"stand_id": str(stand.id), "qris_code": "000201010212", "store_name": "Warung A"},
        )

    def test_missing_or_empty_code(self):
        empty = make_stand(store_name="No QR")

        self.assertIsNone(qris_payload(empty.id))
        with self.assertRaises(NotFoundError):
            get_qris_for_stand(empty.id)
        with self.assertRaises(NotFoundError):
            get_qris_for_stand(make_student().id)


class QRISAPITests(TestCase):
    def test_lookup(self):
        client = APIClient()
        client.force_authenticate(user=make_student())
        stand = make_stand(store_name="Warung A", qris="QR-A")

        response = client.get(reverse("stands:qris", kwargs={"stand_id": stand.id}))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["qris_code"], "QR-A")

        missing = client.get(reverse("stands:qris", kwargs={"stand_id": make_stand().id}))
        self.assertEqual(missing.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(missing.data["error"]["code"], "NOT_FOUND")
