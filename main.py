"""
main.py
-------
Entry point for the expense tracker bot and its composition root.

Responsibilities:
    - Open the database and make sure the schema (and seed rows) exist.
    - Build the repository and services and hand them to the handlers
      through ``bot_data``.
    - Configure and start the Telegram bot.
"""

from telegram import BotCommand
from telegram.ext import Application, CommandHandler

from config import TELEGRAM_BOT_TOKEN
from db.connection import Database, connect
from handlers.expense_handler import (
    add_command,
    categories_command,
    category_command,
    delete_command,
    edit_command,
    list_command,
    paid_command,
    search_command,
)
from handlers.import_handler import import_command
from handlers.start_handler import help_command, myid_command, start_command
from repositories.expense_repo import ExpenseRepository
from services.expense_service import ExpenseService
from services.import_service import ImportService
from utils.logger import get_logger

logger = get_logger(__name__)


async def set_bot_commands(application: Application) -> None:
    """Register bot commands menu in Telegram on startup."""
    commands = [
        BotCommand("start", "🚀 Bắt đầu"),
        BotCommand("help", "📖 Trợ giúp"),
        BotCommand("list", "📋 Danh sách chi tiêu"),
        BotCommand("search", "🔍 Tìm kiếm"),
        BotCommand("category", "🏷️ Lọc theo danh mục"),
        BotCommand("categories", "📂 Tổng theo danh mục"),
        BotCommand("add", "➕ Thêm khoản chi"),
        BotCommand("edit", "✏️ Sửa khoản chi"),
        BotCommand("paid", "✅ Đổi trạng thái thanh toán"),
        BotCommand("delete", "🗑️ Xóa khoản chi"),
        BotCommand("import", "📥 Nhập từ API"),
        BotCommand("myid", "🆔 Telegram ID"),
    ]
    await application.bot.set_my_commands(commands)
    logger.info("Bot commands menu registered successfully.")


def build_application(db: Database) -> Application:
    """
    Wire repository, services and handlers around an open database.

    Args:
        db: Initialized database handle; its lifetime is managed by main().
    """
    repo = ExpenseRepository(db)

    app = Application.builder().token(TELEGRAM_BOT_TOKEN).post_init(set_bot_commands).build()
    app.bot_data["expense_service"] = ExpenseService(repo)
    app.bot_data["import_service"] = ImportService(repo)

    app.add_handler(CommandHandler("start", start_command))
    app.add_handler(CommandHandler("help", help_command))
    app.add_handler(CommandHandler("myid", myid_command))
    app.add_handler(CommandHandler("list", list_command))
    app.add_handler(CommandHandler("search", search_command))
    app.add_handler(CommandHandler("category", category_command))
    app.add_handler(CommandHandler("categories", categories_command))
    app.add_handler(CommandHandler("add", add_command))
    app.add_handler(CommandHandler("edit", edit_command))
    app.add_handler(CommandHandler("paid", paid_command))
    app.add_handler(CommandHandler("delete", delete_command))
    app.add_handler(CommandHandler("import", import_command))
    return app


def main() -> None:
    """Initialize and run the bot."""

    # ── 1. Database setup ─────────────────────────────────
    logger.info("Initializing database...")
    db = connect()
    ExpenseRepository(db).initialize()

    # ── 2. Build the Telegram application ─────────────────
    logger.info("Starting Telegram bot...")
    app = build_application(db)

    # ── 3. Start polling ──────────────────────────────────
    logger.info("🚀 Expense bot is running! Press Ctrl+C to stop.")
    try:
        app.run_polling(drop_pending_updates=True, allowed_updates=["message"])
    finally:
        # ── 4. Cleanup on shutdown ────────────────────────
        db.close()
        logger.info("Expense bot stopped.")


if __name__ == "__main__":
    main()
