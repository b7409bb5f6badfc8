"""
handlers/expense_handler.py
----------------------------
Handles expense-related commands.
Delegates all logic to the ExpenseService stored in ``bot_data``.
"""

from typing import Optional

from telegram import Update
from telegram.ext import ContextTypes

from security.auth import authorized_only
from services.expense_service import ExpenseService
from utils.logger import get_logger

logger = get_logger(__name__)

ADD_USAGE = (
    "➕ *Thêm khoản chi*\n\n"
    "*Cú pháp:* `/add <tiêu đề> | <số tiền> | <danh mục>`\n\n"
    "*Ví dụ:*\n"
    "• `/add Cà phê | 30000 | Đồ uống`\n"
    "• `/add Tiền điện | 450.000`\n\n"
    "💡 Danh mục có thể bỏ trống."
)

EDIT_USAGE = (
    "✏️ *Sửa khoản chi*\n\n"
    "*Cú pháp:* `/edit <số> | <tiêu đề> | <số tiền> | <danh mục>`\n\n"
    "*Ví dụ:*\n"
    "• `/edit 5 | Ăn tối | 120000 | Ăn uống`"
)


def split_fields(args: Optional[list[str]]) -> list[str]:
    """
    Re-join Telegram's whitespace-split args and split on ``|``.

    Example:
        ["Cà", "phê", "|", "30000"] -> ["Cà phê", "30000"]
    """
    text = " ".join(args or [])
    if not text.strip():
        return []
    return [part.strip() for part in text.split("|")]


def parse_id(text: str) -> Optional[int]:
    """Parse an expense id, accepting a leading '#'. None if not a positive int."""
    try:
        value = int(text.strip().lstrip("#"))
    except ValueError:
        return None
    return value if value > 0 else None


def _service(context: ContextTypes.DEFAULT_TYPE) -> ExpenseService:
    return context.bot_data["expense_service"]


@authorized_only
async def list_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /list [query] - show all expenses, optionally filtered by title."""
    query = " ".join(context.args or [])
    await update.message.reply_text(_service(context).list_expenses(query=query))


@authorized_only
async def search_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /search <text> - case-insensitive search in titles.
    Usage: /search cà phê
    """
    if not context.args:
        await update.message.reply_text("🔍 Cú pháp: `/search <từ khóa>`", parse_mode="Markdown")
        return
    query = " ".join(context.args)
    await update.message.reply_text(_service(context).list_expenses(query=query))


@authorized_only
async def category_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /category <name> - show expenses of one category."""
    if not context.args:
        await update.message.reply_text("🏷️ Cú pháp: `/category <danh mục>`", parse_mode="Markdown")
        return
    category = " ".join(context.args).strip()
    await update.message.reply_text(_service(context).list_expenses(category=category))


@authorized_only
async def categories_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /categories - totals per category."""
    await update.message.reply_text(_service(context).categories_summary())


@authorized_only
async def add_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /add <title> | <amount> [| <category>]."""
    fields = split_fields(context.args)
    if len(fields) < 2:
        await update.message.reply_text(ADD_USAGE, parse_mode="Markdown")
        return

    title, amount_text = fields[0], fields[1]
    category = fields[2] if len(fields) > 2 else None
    result = _service(context).add_expense(title, amount_text, category)

    if result["success"]:
        await update.message.reply_text(result["message"])
    else:
        await update.message.reply_text(f"❌ Lỗi: {result['error']}")


@authorized_only
async def edit_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /edit <id> | <title> | <amount> [| <category>]."""
    fields = split_fields(context.args)
    if len(fields) < 3:
        await update.message.reply_text(EDIT_USAGE, parse_mode="Markdown")
        return

    expense_id = parse_id(fields[0])
    if expense_id is None:
        await update.message.reply_text("⚠️ Số thứ tự khoản chi phải là số nguyên.")
        return

    category = fields[3] if len(fields) > 3 else None
    msg = _service(context).edit_expense(expense_id, fields[1], fields[2], category)
    await update.message.reply_text(msg)


@authorized_only
async def paid_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /paid <id> - toggle paid/owed.
    Usage: /paid 5
    """
    expense_id = parse_id(context.args[0]) if context.args else None
    if expense_id is None:
        await update.message.reply_text("⚠️ Cú pháp: /paid <số>\nVí dụ: /paid 5")
        return
    await update.message.reply_text(_service(context).toggle_paid(expense_id))


@authorized_only
async def delete_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /delete <id> - delete an expense.
    Usage: /delete 5
    """
    expense_id = parse_id(context.args[0]) if context.args else None
    if expense_id is None:
        await update.message.reply_text("⚠️ Cú pháp: /delete <số>\nVí dụ: /delete 5")
        return
    await update.message.reply_text(_service(context).delete_expense(expense_id))
