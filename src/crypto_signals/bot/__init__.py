"""Chat interaction layer exports."""

from crypto_signals.bot.controller import ChatChannel, InteractionController, Menu, MenuOption

__all__ = ["ChatChannel", "InteractionController", "Menu", "MenuOption"]
