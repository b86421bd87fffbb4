"""Tests for the delivery fee schedule."""

from ordering.checkout.checkout import DeliveryPricing


class TestDeliveryPricing:
    def test_pickup_is_free(self):
        assert DeliveryPricing().fee_for("pickup", 1000) == 0

    def test_delivery_below_threshold_pays_fee(self):
        assert DeliveryPricing().fee_for("delivery", 7499) == 1000

    def test_delivery_at_threshold_is_free(self):
        assert DeliveryPricing().fee_for("delivery", 7500) == 0

    def test_delivery_above_threshold_is_free(self):
        assert DeliveryPricing().fee_for("delivery", 12000) == 0

    def test_custom_schedule(self):
        pricing = DeliveryPricing(delivery_fee=650, free_delivery_threshold=5000)
        assert pricing.fee_for("delivery", 4999) == 650
        assert pricing.fee_for("delivery", 5000) == 0
