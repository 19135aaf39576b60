"""Telegram bot exposing the dashboard mini app and quick stats."""
from __future__ import annotations

import logging
import os

from telegram import InlineKeyboardButton, InlineKeyboardMarkup, Update, WebAppInfo
from telegram.ext import Application, CommandHandler, ContextTypes

from backend.bot import formatters
from backend.bot.client import DashboardAPIClient, DashboardAPIError, api_base_from_app_url
from backend.core.logging_setup import configure_logging

logger = logging.getLogger(__name__)

DEFAULT_MINI_APP_URL = "http://localhost:8000/app"


class DashboardBot:
    def __init__(self, token: str, mini_app_url: str, api_client: DashboardAPIClient) -> None:
        if not token:
            raise ValueError("TELEGRAM_BOT_TOKEN not set in environment")
        self.token = token
        self.mini_app_url = mini_app_url
        self.api_client = api_client

    async def start_command(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        user = update.effective_user
        keyboard = InlineKeyboardMarkup(
            [[InlineKeyboardButton("📊 Dashboard ochish", web_app=WebAppInfo(url=self.mini_app_url))]]
        )
        await update.message.reply_text(
            formatters.format_welcome(user.first_name if user else None),
            reply_markup=keyboard,
        )

    async def help_command(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        await update.message.reply_text(formatters.format_help())

    async def stats_command(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        try:
            data = await self.api_client.fetch_data()
        except DashboardAPIError as exc:
            logger.warning("stats request failed: %s", exc)
            await update.message.reply_text(formatters.format_stats_error())
            return
        await update.message.reply_text(formatters.format_stats(data))

    async def post_shutdown(self, application: Application) -> None:
        await self.api_client.aclose()

    def build_application(self) -> Application:
        application = Application.builder().token(self.token).post_shutdown(self.post_shutdown).build()
        application.add_handler(CommandHandler("start", self.start_command))
        application.add_handler(CommandHandler("help", self.help_command))
        application.add_handler(CommandHandler("stats", self.stats_command))
        return application

    def run(self) -> None:
        logger.info("starting Telegram bot, mini app at %s", self.mini_app_url)
        self.build_application().run_polling(allowed_updates=Update.ALL_TYPES)


def main() -> None:
    configure_logging()
    mini_app_url = os.getenv("MINI_APP_URL") or DEFAULT_MINI_APP_URL
    api_base = os.getenv("DASHBOARD_API_URL") or api_base_from_app_url(mini_app_url)
    bot = DashboardBot(
        token=os.getenv("TELEGRAM_BOT_TOKEN", ""),
        mini_app_url=mini_app_url,
        api_client=DashboardAPIClient(api_base),
    )
    bot.run()


if __name__ == "__main__":
    main()
