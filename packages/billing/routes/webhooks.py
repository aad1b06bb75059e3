"""
Webhook endpoint for billing events.

Public endpoint (no auth required) for Stripe webhooks. The signature is
validated internally against the raw request body.
"""

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse, PlainTextResponse

from common.core.otel_axiom_exporter import get_logger
from packages.billing.dependencies import get_webhook_handler
from packages.billing.exceptions import MalformedEventError, SignatureInvalidError
from packages.billing.webhooks.signature import SIGNATURE_HEADER
from packages.billing.webhooks.stripe_webhook import StripeWebhookHandler

logger = get_logger(__name__)

router = APIRouter()


# Every method is routed here so the endpoint answers 405 itself
@router.api_route(
    "/webhook",
    methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    include_in_schema=False,
)
async def stripe_webhook(
    request: Request,
    handler: StripeWebhookHandler = Depends(get_webhook_handler),
) -> Response:
    """
    Receive webhook events from Stripe payment platform.

    200 acknowledges the event (including ignored ones). 400 rejects it for
    good. 500 asks Stripe to redeliver later.
    """
    if request.method == "OPTIONS":
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    if request.method != "POST":
        return PlainTextResponse(
            "Method Not Allowed", status_code=status.HTTP_405_METHOD_NOT_ALLOWED
        )

    signature = request.headers.get(SIGNATURE_HEADER)
    if not signature:
        return PlainTextResponse(
            "No signature found", status_code=status.HTTP_400_BAD_REQUEST
        )

    # Raw bytes, never parsed before verification
    raw_body = await request.body()

    try:
        await handler.handle(raw_body, signature)
    except (SignatureInvalidError, MalformedEventError) as e:
        return PlainTextResponse(
            f"Webhook Error: {e}", status_code=status.HTTP_400_BAD_REQUEST
        )
    except Exception as e:
        logger.error(
            f"Failed to process Stripe webhook: {str(e)}",
            extra={"error": str(e), "error_type": type(e).__name__},
        )
        return JSONResponse(
            {"error": str(e)}, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    return JSONResponse({"received": True})
