"""Message texts for the Telegram bot (Uzbek, as the dashboard UI)."""
from __future__ import annotations

from datetime import datetime


def format_welcome(first_name: str | None) -> str:
    name = first_name or "Foydalanuvchi"
    return (
        f"Assalomu alaykum, {name}! 👋\n\n"
        "📊 Qarzdorlik Dashboard'ga xush kelibsiz!\n\n"
        "Bu bot orqali agent va qarzdorlar statistikasini ko'rishingiz mumkin.\n\n"
        "👇 Quyidagi tugmani bosib dashboardni oching:"
    )


def format_help() -> str:
    return (
        "📖 Yordam\n\n"
        "/start - Botni ishga tushirish\n"
        "/stats - Qisqa statistika\n"
        "/help - Yordam\n\n"
        "Dashboard tugmasini bosib to'liq ma'lumotlarni ko'ring."
    )


def _format_updated(value: str | None) -> str:
    if not value:
        return "Noma'lum"
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return "Noma'lum"
    return parsed.strftime("%d.%m.%Y")


def format_stats(data: dict) -> str:
    totals = data.get("totals") or {}
    agents = data.get("agents") or []
    total_usd = float(totals.get("totalUSD") or 0)
    total_uzs = float(totals.get("totalUZS") or 0)
    return (
        "📊 Tezkor statistika:\n\n"
        f"👥 Agentlar: {len(agents)}\n"
        f"👤 Qarzdorlar: {int(totals.get('totalDebtors') or 0)}\n"
        f"💵 USD: ${total_usd:,.0f}\n"
        f"💰 UZS: {total_uzs / 1_000_000:.1f}M\n\n"
        f"📅 Yangilangan: {_format_updated(data.get('lastUpdated'))}"
    )


def format_stats_error() -> str:
    return "❌ Ma'lumotlarni olishda xato. Server ishlamayaptimi?"
