"""
handlers/start_handler.py
--------------------------
Handles /start, /help and /myid.
"""

from telegram import Update
from telegram.ext import ContextTypes

from security.auth import authorized_only
from utils.logger import get_logger

logger = get_logger(__name__)

HELP_TEXT = """
🤖 *Sổ chi tiêu cá nhân*

*🔧 Các lệnh:*
/list - Danh sách chi tiêu (có thể kèm từ khóa)
/search - Tìm theo tiêu đề
/category - Lọc theo danh mục
/categories - Tổng theo danh mục
/add - Thêm khoản chi (`/add Cà phê | 30000 | Đồ uống`)
/edit - Sửa khoản chi (`/edit 5 | Ăn tối | 120000`)
/paid - Đổi trạng thái đã trả / đang nợ
/delete - Xóa khoản chi
/import - Nhập dữ liệu từ API
/myid - Xem Telegram ID của bạn
"""


@authorized_only
async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /start command - show welcome message."""
    user = update.effective_user
    logger.info(f"User {user.id} ({user.first_name}) started the bot.")

    await update.message.reply_text(
        f"Xin chào {user.first_name}! 👋\n"
        f"Mình giúp bạn ghi lại các khoản chi tiêu.\n\n"
        f"Gõ /help để xem tất cả các lệnh."
    )


@authorized_only
async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /help command - show all available commands."""
    await update.message.reply_text(HELP_TEXT, parse_mode="Markdown")


@authorized_only
async def myid_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /myid command - show user's Telegram ID for whitelisting."""
    user = update.effective_user
    await update.message.reply_text(
        f"🆔 Telegram ID: `{user.id}`\n"
        f"Thêm số này vào `ALLOWED_USER_IDS` trong file `.env` để khóa bot.",
        parse_mode="Markdown",
    )
