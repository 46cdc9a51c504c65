import asyncio
import logging
import time
from typing import Optional

import razorpay

from payonerupee.config import Settings
from payonerupee.errors import UpstreamError

logger = logging.getLogger(__name__)


class OrderGateway:
    def __init__(self, settings: Settings,
                 client: Optional[razorpay.Client] = None):
        self.settings = settings
        self.client = client or razorpay.Client(
            auth=(settings.razorpay_key_id, settings.razorpay_key_secret)
        )

    def order_options(self) -> dict:
        return {
            "amount": self.settings.order_amount,
            "currency": self.settings.order_currency,
            "receipt": f"receipt_{int(time.time() * 1000)}",
            "payment_capture": 1,
        }

    async def create_order(self) -> dict:
        options = self.order_options()
        try:
            order = await asyncio.wait_for(
                asyncio.to_thread(self.client.order.create,
                                  data=options),
                timeout=self.settings.gateway_timeout,
            )
        except asyncio.TimeoutError:
            logger.error("razorpay order creation timed out after %.1fs",
                         self.settings.gateway_timeout)
            raise UpstreamError("payment gateway timed out")
        except Exception as e:
            logger.exception("razorpay order creation failed")
            raise UpstreamError(str(e) or None) from e

        logger.info("created order %s (%s)", order.get("id"),
                    options["receipt"])
        return order
