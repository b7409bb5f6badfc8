"""
security/auth.py
-----------------
Access guard for the Telegram bot.
The expense book is personal: only whitelisted Telegram users may touch it.
"""

from functools import wraps
from typing import Callable

from telegram import Update
from telegram.ext import ContextTypes

from config import ALLOWED_USER_IDS
from utils.logger import get_logger

logger = get_logger(__name__)


def authorized_only(func: Callable):
    """
    Decorator that restricts a handler to whitelisted users only.

    Usage:
        @authorized_only
        async def my_handler(update, context):
            ...

    Behavior:
        - If ALLOWED_USER_IDS is empty, ALL users are allowed (dev mode).
        - Otherwise non-listed users get a refusal and the attempt is logged.
    """
    @wraps(func)
    async def wrapper(update: Update, context: ContextTypes.DEFAULT_TYPE, *args, **kwargs):
        user = update.effective_user
        if not user:
            return

        if ALLOWED_USER_IDS and user.id not in ALLOWED_USER_IDS:
            logger.warning(
                f"🚫 Unauthorized access attempt: user_id={user.id}, "
                f"username={user.username}"
            )
            await update.message.reply_text("⛔ Bot này là sổ chi tiêu cá nhân, bạn không có quyền truy cập.")
            return

        return await func(update, context, *args, **kwargs)

    return wrapper
