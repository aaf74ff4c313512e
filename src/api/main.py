"""
FastAPI backend: rendered menu and Telegram webhook.
Run with uvicorn: uvicorn api.main:app --reload
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from repo root (when run from repo root or from Docker)
for path in (
    Path(__file__).resolve().parent.parent.parent / ".env",
    Path.cwd() / ".env",
):
    if path.exists():
        load_dotenv(path)
        break

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel

from contactdesk.application import ConfigMissing, render_entry
from contactdesk.domain import ActionKind
from contactdesk.infrastructure import get_menu
from contactdesk.infrastructure.telegram import (
    execute_actions,
    get_session,
    update_to_event,
)

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Contact Desk API")


# --- REST: health ---


@app.get("/health")
def health():
    return {"status": "ok"}


# --- REST: menu ---


class MenuRow(BaseModel):
    section: int
    action: str
    title: str
    description: str | None = None
    centered: bool
    disclosure: bool
    height: float


@app.get("/menu")
def menu() -> list[MenuRow]:
    """
    The bundled menu configuration as list rows.

    Static config for clients and tooling, not the gated contacts view: chats only see
    the menu through ContactBrowser once contacts access is granted.
    """
    try:
        config = get_menu()
    except ConfigMissing as e:
        logger.error("Menu configuration unavailable: %s", e)
        raise HTTPException(status_code=503, detail=str(e)) from e
    return [
        MenuRow(
            section=row.section,
            action=ActionKind(row.section).name,
            title=row.text,
            description=row.detail_text,
            centered=row.centered,
            disclosure=row.disclosure,
            height=row.height,
        )
        for row in (
            render_entry(int(entry.action_kind), entry) for entry in config.entries
        )
    ]


# --- Telegram webhook ---


@app.post("/webhook/telegram")
async def webhook_telegram(request: Request):
    """Handle Telegram updates. Set Telegram webhook URL to https://<your-domain>/webhook/telegram"""
    from telegram import Bot, Update

    logger.info("Telegram webhook received")
    try:
        body = await request.json()
    except Exception as e:
        logger.warning("Telegram webhook body error: %s", e)
        raise HTTPException(status_code=400, detail="Invalid JSON") from e
    try:
        update = Update.de_json(body, None)
    except Exception as e:
        logger.warning("Telegram webhook parse error: %s", e)
        raise HTTPException(status_code=400, detail="Invalid update") from e
    if not update or not update.effective_chat:
        logger.warning("Telegram webhook: no update or chat")
        return {}
    chat_id = int(update.effective_chat.id)
    event = update_to_event(update)
    if event is None:
        return {}
    token = os.environ.get("TELEGRAM_BOT_TOKEN", "").strip()
    if not token:
        logger.error("TELEGRAM_BOT_TOKEN not set in backend environment")
        return {}

    actions = get_session(chat_id).handle(event)

    bot = Bot(token=token)
    # Answer callback so Telegram stops showing loading state
    if update.callback_query:
        await bot.answer_callback_query(callback_query_id=update.callback_query.id)
    await execute_actions(bot, chat_id, actions)
    return {}
