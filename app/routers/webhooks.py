from typing import Any, Dict, Optional
from fastapi import APIRouter, Body
from app.schemas.common import WebhookAck
from app.core.logging_config import logger

router = APIRouter()


@router.post("/slack", response_model=WebhookAck)
def slack_webhook(payload: Optional[Dict[str, Any]] = Body(None)):
    """
    Acknowledge an inbound Slack event. Logged only.
    """
    logger.info(f"Slack webhook received: {payload}")
    return WebhookAck()


@router.post("/n8n", response_model=WebhookAck)
def n8n_webhook(payload: Optional[Dict[str, Any]] = Body(None)):
    """
    Acknowledge an inbound n8n workflow callback. Logged only.
    """
    logger.info(f"n8n webhook received: {payload}")
    return WebhookAck()
