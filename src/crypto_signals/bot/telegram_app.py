"""Telegram bindings for the interaction controller."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Optional

from telegram import Bot, InlineKeyboardButton, InlineKeyboardMarkup, Update
from telegram.error import TelegramError
from telegram.ext import (
    Application,
    ApplicationBuilder,
    CallbackQueryHandler,
    CommandHandler,
    ContextTypes,
)

from crypto_signals.bot.controller import SELECTION_PREFIX, InteractionController, Menu
from crypto_signals.bot.messages import split_message
from crypto_signals.config import Settings
from crypto_signals.decision.engine import SignalEngine
from crypto_signals.errors import DeliveryFailure


logger = logging.getLogger(__name__)


def build_keyboard(menu: Menu) -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(
        [[InlineKeyboardButton(option.label, callback_data=option.token)] for option in menu.options]
    )


class TelegramChannel:
    """ChatChannel implementation over a python-telegram-bot ``Bot``."""

    def __init__(self, bot: Bot) -> None:
        self.bot = bot

    async def send_text(
        self, chat_id: int, text: str, menu: Optional[Menu] = None
    ) -> None:
        chunks = split_message(text)
        markup = build_keyboard(menu) if menu is not None else None
        try:
            for index, chunk in enumerate(chunks):
                # The keyboard goes under the last chunk.
                reply_markup = markup if index == len(chunks) - 1 else None
                await self.bot.send_message(
                    chat_id=chat_id, text=chunk, reply_markup=reply_markup
                )
        except TelegramError as exc:
            raise DeliveryFailure(f"telegram send failed: {exc}") from exc


def register_handlers(application: Application, controller: InteractionController) -> None:
    async def start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        if update.effective_chat is not None:
            await controller.handle_start(update.effective_chat.id)

    async def help_cmd(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        if update.effective_chat is not None:
            await controller.handle_help(update.effective_chat.id)

    async def pairs_cmd(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        if update.effective_chat is not None:
            await controller.handle_pairs(update.effective_chat.id)

    async def signal_cmd(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        if update.effective_chat is not None:
            await controller.handle_signal(update.effective_chat.id)

    async def on_selection(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        query = update.callback_query
        if query is None or update.effective_chat is None:
            return
        if not controller.accepts(query.data):
            logger.info("Ignoring stale selection %r", query.data)
            return
        try:
            await query.answer()
        except TelegramError as exc:
            logger.warning("Could not acknowledge selection %r: %s", query.data, exc)
        await controller.handle_selection(update.effective_chat.id, query.data)

    async def on_error(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
        logger.error("Telegram handler error: %s", context.error, exc_info=context.error)

    application.add_handler(CommandHandler("start", start))
    application.add_handler(CommandHandler("help", help_cmd))
    application.add_handler(CommandHandler(["pairs", "list"], pairs_cmd))
    application.add_handler(CommandHandler("signal", signal_cmd))
    application.add_handler(CallbackQueryHandler(on_selection, pattern=f"^{SELECTION_PREFIX}"))
    application.add_error_handler(on_error)


def build_application(
    settings: Settings,
    engine: SignalEngine,
    post_init: Optional[Callable[[Application], Awaitable[None]]] = None,
    post_shutdown: Optional[Callable[[Application], Awaitable[None]]] = None,
) -> Application:
    builder = ApplicationBuilder().token(settings.telegram_bot_token).concurrent_updates(True)
    if post_init is not None:
        builder = builder.post_init(post_init)
    if post_shutdown is not None:
        builder = builder.post_shutdown(post_shutdown)
    application = builder.build()
    controller = InteractionController(
        engine,
        TelegramChannel(application.bot),
        settings.monitored_pairs,
        mode=settings.signal_mode,
    )
    register_handlers(application, controller)
    return application
