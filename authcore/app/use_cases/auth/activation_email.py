"""
Activation email dispatch shared by register and resend.

Delivery is best effort: a failure or timeout is logged and never turns
into an error for the calling operation.
"""

import asyncio
import logging

from authcore.app.services.email_sender import IEmailSender
from authcore.domain.entities import User

logger = logging.getLogger(__name__)


async def dispatch_activation_email(
    sender: IEmailSender, user: User, token: str, timeout: float
) -> bool:
    try:
        sent = await asyncio.wait_for(
            sender.send_activation(user.email, token, user.full_name), timeout=timeout
        )
    except asyncio.TimeoutError:
        logger.warning(
            f"Activation email for user {user.public_id} timed out after {timeout}s"
        )
        return False
    except Exception:
        logger.exception(f"Activation email for user {user.public_id} failed")
        return False

    if not sent:
        logger.warning(f"Activation email for user {user.public_id} was not delivered")
    return sent
