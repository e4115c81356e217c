from pydantic import BaseModel


class PaymentWebhook(BaseModel):
    booking_id: int
    status: str
    confirm: bool = True
