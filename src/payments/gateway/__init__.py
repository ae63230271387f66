"""Payment gateway port and adapters.

- FakeGateway for development and testing
"""

from payments.gateway.fake_adapter import FakeGateway
from payments.gateway.port import CaptureResult, PaymentCaptureError, PaymentGateway

__all__ = ["CaptureResult", "FakeGateway", "PaymentCaptureError", "PaymentGateway"]
