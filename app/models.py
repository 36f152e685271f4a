from pydantic import BaseModel


class WebhookTarget(BaseModel):
    url: str
    method: str
    headers: dict[str, str] = {}


class TriggerResponse(BaseModel):
    success: bool
    message: str
