"""Chat command surface driving the signal engine.

The controller is platform-agnostic: it speaks to a ``ChatChannel`` and never
imports the Telegram library. Pair selection keeps no server-side session; the
pending choice lives in the menu's own selection tokens, so a menu stays valid
until the user taps it or the pair leaves the catalog.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Iterable, Optional, Protocol, Tuple

from crypto_signals.bot import messages
from crypto_signals.decision.engine import SignalEngine
from crypto_signals.decision.models import SignalOutcome
from crypto_signals.errors import DeliveryFailure


logger = logging.getLogger(__name__)

SELECTION_PREFIX = "pair_"


@dataclass(frozen=True)
class MenuOption:
    label: str
    token: str


@dataclass(frozen=True)
class Menu:
    title: str
    options: Tuple[MenuOption, ...]


class ChatChannel(Protocol):
    async def send_text(
        self, chat_id: int, text: str, menu: Optional[Menu] = None
    ) -> None:
        """Deliver ``text``; raise ``DeliveryFailure`` if the platform refuses."""


def encode_selection(symbol: str) -> str:
    return f"{SELECTION_PREFIX}{symbol}"


def decode_selection(token: Optional[str]) -> Optional[str]:
    if not token or not token.startswith(SELECTION_PREFIX):
        return None
    symbol = token[len(SELECTION_PREFIX) :]
    return symbol or None


class InteractionController:
    """Handle start/help, pairs, signal and menu selection events."""

    def __init__(
        self,
        engine: SignalEngine,
        channel: ChatChannel,
        catalog: Iterable[str],
        mode: str = "menu",
    ) -> None:
        self.engine = engine
        self.channel = channel
        self.catalog = tuple(catalog)
        self.mode = mode

    def build_menu(self) -> Menu:
        return Menu(
            title=messages.MENU_TITLE,
            options=tuple(
                MenuOption(label=symbol, token=encode_selection(symbol))
                for symbol in self.catalog
            ),
        )

    async def handle_start(self, chat_id: int) -> None:
        logger.info("/start received from chat %s", chat_id)
        await self._deliver(chat_id, messages.welcome_text(self.mode))

    async def handle_help(self, chat_id: int) -> None:
        logger.info("/help received from chat %s", chat_id)
        await self._deliver(chat_id, messages.welcome_text(self.mode))

    async def handle_pairs(self, chat_id: int) -> None:
        logger.info("/pairs received from chat %s", chat_id)
        await self._deliver(chat_id, messages.pairs_text(self.catalog))

    async def handle_signal(self, chat_id: int) -> None:
        logger.info("/signal received from chat %s (mode=%s)", chat_id, self.mode)
        if self.mode == "bulk":
            await self.run_bulk(chat_id)
            return
        menu = self.build_menu()
        await self._deliver(chat_id, menu.title, menu=menu)

    def accepts(self, token: Optional[str]) -> bool:
        return decode_selection(token) in self.catalog

    async def handle_selection(self, chat_id: int, token: Optional[str]) -> bool:
        """Run the pipeline for a menu choice.

        Returns ``False`` without replying when the token does not name a pair
        in the current catalog.
        """
        if not self.accepts(token):
            logger.info("Ignoring selection %r from chat %s", token, chat_id)
            return False
        symbol = decode_selection(token)

        await self._deliver(chat_id, messages.generating_text(symbol))
        outcome = await self.engine.produce_signal(symbol)
        await self._deliver_outcome(chat_id, outcome)
        return True

    async def run_bulk(self, chat_id: int) -> None:
        await self._deliver(chat_id, messages.bulk_start_text(len(self.catalog)))
        async for outcome in self.engine.iter_signals(self.catalog):
            await self._deliver_outcome(chat_id, outcome)

    async def _deliver_outcome(self, chat_id: int, outcome: SignalOutcome) -> None:
        await self._deliver(chat_id, outcome.text)

    async def _deliver(self, chat_id: int, text: str, menu: Optional[Menu] = None) -> bool:
        try:
            await self.channel.send_text(chat_id, text, menu=menu)
        except DeliveryFailure as exc:
            logger.error("Delivery to chat %s failed: %s", chat_id, exc)
            return False
        return True
