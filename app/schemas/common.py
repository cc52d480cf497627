from pydantic import BaseModel


class WebhookAck(BaseModel):
    success: bool = True
