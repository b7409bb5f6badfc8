"""
handlers/import_handler.py
---------------------------
Handles /import: pulls expenses from the remote API and merges them.
"""

from telegram import Update
from telegram.ext import ContextTypes

from security.auth import authorized_only
from services.import_service import ImportService
from utils.logger import get_logger

logger = get_logger(__name__)


@authorized_only
async def import_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /import [url] - merge remote expenses, skipping duplicates.
    Without an argument the IMPORT_API_URL from .env is used.
    """
    service: ImportService = context.bot_data["import_service"]
    url = context.args[0] if context.args else None

    await update.message.reply_text("⏳ Đang nhập dữ liệu...")
    result = await service.import_from_api_async(url)

    if result.success:
        logger.info(f"User {update.effective_user.id} imported {result.imported} expenses")
        await update.message.reply_text(
            f"📥 Đã nhập {result.imported} khoản chi mới "
            f"(bỏ qua {result.skipped} khoản trùng)."
        )
    else:
        logger.warning(f"Import requested by user {update.effective_user.id} failed: {result.error}")
        await update.message.reply_text("❌ Import thất bại. Kiểm tra API.")
