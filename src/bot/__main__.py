"""
Development bot: Telegram long polling + ContactBrowser per chat.
Run: python -m bot (from repo root, with .env or env vars set).
"""
import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Repo root: from src/bot/__main__.py go up to repo root (parent.parent.parent when in src layout)
_REPO_ROOT = Path(__file__).resolve().parent.parent.parent
# Load .env from repo root or current dir
for path in (_REPO_ROOT / ".env", Path.cwd() / ".env"):
    if path.exists():
        load_dotenv(path)
        break

from telegram import Update
from telegram.ext import (
    Application,
    CallbackQueryHandler,
    ContextTypes,
    MessageHandler,
    filters,
)

from contactdesk.application import ConfigMissing
from contactdesk.infrastructure import get_menu
from contactdesk.infrastructure.telegram import execute_actions, get_session, update_to_event

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)
logger = logging.getLogger(__name__)


async def handle_update(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Route every message and button press through the chat's browser session."""
    if not update.effective_chat:
        return
    event = update_to_event(update)
    if update.callback_query:
        await update.callback_query.answer()
    if event is None:
        return
    chat_id = update.effective_chat.id
    actions = get_session(chat_id).handle(event)
    await execute_actions(context.bot, chat_id, actions)


def main() -> None:
    use_polling = os.environ.get("USE_POLLING", "").strip().lower() in ("1", "true", "yes")
    if not use_polling:
        raise SystemExit(
            "For production use the FastAPI backend: uvicorn api.main:app "
            "and set the Telegram webhook to https://<your-domain>/webhook/telegram. "
            "For local dev with polling set USE_POLLING=1 and run python -m bot again."
        )
    token = os.environ.get("TELEGRAM_BOT_TOKEN", "").strip()
    if not token:
        raise SystemExit(
            "Set TELEGRAM_BOT_TOKEN (e.g. in .env). Get a token from @BotFather."
        )
    try:
        menu = get_menu()
    except ConfigMissing as e:
        raise SystemExit(f"Menu configuration unavailable: {e}") from e
    app = Application.builder().token(token).build()
    app.add_handler(CallbackQueryHandler(handle_update))
    app.add_handler(MessageHandler(filters.ALL, handle_update))
    logger.info("Bot running (polling, dev). Menu sections: %d", len(menu.entries))
    app.run_polling(allowed_updates=Update.ALL_TYPES)


if __name__ == "__main__":
    main()
