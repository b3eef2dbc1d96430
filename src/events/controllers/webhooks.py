import hmac

import structlog
from django.conf import settings
from django.http import HttpRequest
from ninja.errors import HttpError
from ninja_extra import api_controller, route

from common.throttling import WebhookThrottle
from events import schema

logger = structlog.get_logger(__name__)


@api_controller("/webhooks", auth=None, tags=["Webhooks"], throttle=WebhookThrottle())
class WorkflowWebhookController:
    @route.post("/workflow-callback", url_name="workflow_callback", response=schema.WebhookCallbackResponse)
    def workflow_callback(
        self, request: HttpRequest, payload: schema.WebhookCallbackSchema
    ) -> schema.WebhookCallbackResponse:
        """Receive the result of a check-in processed by the workflow automation service."""
        secret = settings.WORKFLOW_WEBHOOK_SECRET
        sent = request.META.get("HTTP_X_WEBHOOK_SECRET", "")
        if not secret or not hmac.compare_digest(sent.encode(), secret.encode()):
            logger.warning("workflow_callback_rejected")
            raise HttpError(401, "Invalid webhook secret")
        logger.info(
            "workflow_callback_received",
            retorno=payload.retorno,
            message=payload.message,
            correlation_id=payload.correlation_id,
        )
        return schema.WebhookCallbackResponse()
