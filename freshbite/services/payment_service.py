# freshbite/services/payment_service.py
import hashlib
import hmac
import math
import time
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Dict, Any

import requests
from requests import RequestException

from freshbite.domain.exceptions import VerificationFailed
from freshbite.utils.retry import http_retry
from freshbite.utils.settings import (
    RAZORPAY_KEY_ID,
    RAZORPAY_KEY_SECRET,
    RAZORPAY_API_URL,
    RAZORPAY_PLACEHOLDER_KEY,
    HTTP_TIMEOUT_SECONDS,
)
from freshbite.utils.logging import get_logger

logger = get_logger(__name__)

MOCK_ORDER_PREFIX = "order_mock_"


def to_minor_units(amount: Decimal) -> int:
    # rupie -> paise, zaokraglenie w gore
    return int(math.ceil(Decimal(str(amount)) * 100))


def _now_millis() -> int:
    return int(time.time() * 1000)


def is_mock_order(order_id: str | None) -> bool:
    return bool(order_id) and order_id.startswith(MOCK_ORDER_PREFIX)


class PaymentProvider(ABC):
    """
    Bramka platnosci, wariant wybierany raz przy starcie (build_payment_provider)
    - create_intent: zamowienie po stronie dostawcy
    - verify: sprawdzenie podpisu zwrotnego
    """

    public_key: str = RAZORPAY_KEY_ID or RAZORPAY_PLACEHOLDER_KEY

    @abstractmethod
    def create_intent(self, amount: Decimal, currency: str = "INR") -> Dict[str, Any]:
        ...

    @abstractmethod
    def verify(self, order_id: str, payment_id: str | None, signature: str | None) -> Dict[str, Any]:
        ...

    @staticmethod
    def mock_intent(amount: Decimal, currency: str) -> Dict[str, Any]:
        return {
            "id": f"{MOCK_ORDER_PREFIX}{_now_millis()}",
            "amount": to_minor_units(amount),
            "currency": currency,
        }

    @staticmethod
    def mock_verification(payment_id: str | None) -> Dict[str, Any]:
        return {
            "success": True,
            "payment_id": payment_id or f"mock_payment_{_now_millis()}",
            "message": "Payment verified successfully (mock)",
            "mode": "mock",
        }


class MockPaymentProvider(PaymentProvider):
    """Brak kluczy dostawcy: wszystko lokalnie, kazda weryfikacja przechodzi."""

    def create_intent(self, amount: Decimal, currency: str = "INR") -> Dict[str, Any]:
        intent = self.mock_intent(amount, currency)
        logger.info(f"Mock payment intent {intent['id']} for {intent['amount']} {currency}")
        return intent

    def verify(self, order_id: str, payment_id: str | None, signature: str | None) -> Dict[str, Any]:
        logger.info(f"Mock verification of payment order {order_id}")
        return self.mock_verification(payment_id)


class RazorpayProvider(PaymentProvider):
    def __init__(
        self,
        key_id: str,
        key_secret: str,
        base_url: str | None = None,
        timeout: int = HTTP_TIMEOUT_SECONDS,
    ):
        self.public_key = key_id
        self.key_id = key_id
        self.key_secret = key_secret
        self.base_url = (base_url or RAZORPAY_API_URL).rstrip("/")
        self.timeout = timeout

    @http_retry()
    def _create_order(self, payload: dict) -> dict:
        url = f"{self.base_url}/orders"
        logger.info(f"RazorpayProvider POST {url}")

        resp = requests.post(url, json=payload, auth=(self.key_id, self.key_secret), timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()

    def create_intent(self, amount: Decimal, currency: str = "INR") -> Dict[str, Any]:
        payload = {
            "amount": to_minor_units(amount),
            "currency": currency,
            "receipt": f"receipt_{_now_millis()}",
        }

        try:
            order = self._create_order(payload)
            return {
                "id": order["id"],
                "amount": order["amount"],
                "currency": order["currency"],
            }
        except (RequestException, KeyError, ValueError) as e:
            logger.warning(f"Razorpay order creation failed, falling back to mock intent: {e}")
            return self.mock_intent(amount, currency)

    def signature_for(self, order_id: str, payment_id: str) -> str:
        message = f"{order_id}|{payment_id}".encode()
        return hmac.new(self.key_secret.encode(), message, hashlib.sha256).hexdigest()

    def verify(self, order_id: str, payment_id: str | None, signature: str | None) -> Dict[str, Any]:
        if is_mock_order(order_id):
            # intent z fallbacku, nie ma czego sprawdzac u dostawcy
            return self.mock_verification(payment_id)

        expected = self.signature_for(order_id, payment_id or "")
        if not signature or not hmac.compare_digest(expected.encode(), signature.encode()):
            logger.warning(f"Signature mismatch for payment order {order_id}")
            raise VerificationFailed("Payment verification failed")

        logger.info(f"Payment {payment_id} for order {order_id} verified")
        return {
            "success": True,
            "payment_id": payment_id or "",
            "message": "Payment verified successfully",
            "mode": "razorpay",
        }


def build_payment_provider(key_id: str | None = RAZORPAY_KEY_ID, key_secret: str | None = RAZORPAY_KEY_SECRET) -> PaymentProvider:
    if key_id and key_secret:
        logger.info("Razorpay credentials configured, using RazorpayProvider")
        return RazorpayProvider(key_id, key_secret)

    logger.info("Razorpay not configured, using mock payments")
    return MockPaymentProvider()
