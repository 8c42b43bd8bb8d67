"""Telegram QR code bot for Railway deployments.

The bot listens for the `/start` command, prompts the user for some text,
encodes it as a QR code and replies with the symbol drawn in text glyphs.
Symbols too large for a single Telegram message are sent back as an SVG
document instead. `/qr <text>` does the same in one step.

Encoding runs in a worker thread so the asyncio event loop stays responsive.
Error correction level, mask pattern and glyphs come from the environment
(see glyphqr.config).
"""

from __future__ import annotations

import asyncio
import html
import logging
import tempfile
from pathlib import Path
from typing import Optional

from telegram import Update
from telegram.constants import MessageLimit, ParseMode
from telegram.error import TelegramError
from telegram.ext import (
    ApplicationBuilder,
    CommandHandler,
    ConversationHandler,
    ContextTypes,
    MessageHandler,
    filters,
)

from glyphqr import QRCode, QRCodeError, make_qr, render_svg, render_text
from glyphqr.config import Settings, configure_logging, load_settings

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------
WAITING_FOR_TEXT = 1
MAX_MESSAGE_LENGTH = MessageLimit.MAX_TEXT_LENGTH

SETTINGS = load_settings()
configure_logging(SETTINGS)
logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# QR utilities
# ---------------------------------------------------------------------------

def describe(code: QRCode) -> str:
    return (
        f"Version {code.version} ({code.size}x{code.size}), "
        f"level {code.error_correction}, mask {code.mask_pattern}, "
        f"{code.mode.name.lower()} mode"
    )


def format_text_reply(code: QRCode, settings: Settings) -> Optional[str]:
    """Return the symbol as an HTML `<pre>` block, or None if it does not fit a message."""
    grid = render_text(code.matrix, settings.fill_symbol, settings.clear_symbol)
    reply = f"<pre>{html.escape(grid)}</pre>\n{html.escape(describe(code))}"
    if len(reply) > MAX_MESSAGE_LENGTH:
        return None
    return reply


def write_svg(code: QRCode, outdir: str) -> Path:
    path = Path(outdir) / f"qr_v{code.version}_{code.error_correction}.svg"
    path.write_text(render_svg(code.matrix), encoding="utf-8")
    logger.info("SVG written to %s", path)
    return path


async def send_qr(update: Update, context: ContextTypes.DEFAULT_TYPE, text: str) -> None:
    """Encode ``text`` off the event loop and reply with the symbol."""
    loop = asyncio.get_running_loop()
    chat_id = update.effective_chat.id

    try:
        code = await loop.run_in_executor(
            None,
            make_qr,
            text,
            SETTINGS.error_correction,
            SETTINGS.mask_pattern,
        )
    except QRCodeError as exc:
        logger.info("Rejected input of %d characters: %s", len(text), exc)
        await update.message.reply_text(f"❌ Could not encode that text.\n{exc}")
        return

    logger.info("Encoded %d characters: %s", len(text), describe(code))
    reply = format_text_reply(code, SETTINGS)
    if reply is not None:
        await update.message.reply_text(reply, parse_mode=ParseMode.HTML)
        return

    with tempfile.TemporaryDirectory(prefix="qr_bot_") as tmpdir:
        svg_path = await loop.run_in_executor(None, write_svg, code, tmpdir)
        try:
            with svg_path.open("rb") as svg_file:
                await context.bot.send_document(
                    chat_id=chat_id,
                    document=svg_file,
                    filename=svg_path.name,
                    caption=f"✅ Too large for a text message. {describe(code)}",
                )
        except TelegramError:
            logger.exception("Uploading SVG failed")
            await update.message.reply_text("❌ Sending the QR code failed. Try again later.")


# ---------------------------------------------------------------------------
# Telegram bot handlers
# ---------------------------------------------------------------------------
async def start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Prompt the user for text after receiving /start."""
    message = (
        "👋 Send me any text and I'll turn it into a QR code!\n"
        "Short texts come back drawn with characters, longer ones as an SVG file.\n\n"
        "Type the text now, or /cancel to stop."
    )
    await update.message.reply_text(message)
    return WAITING_FOR_TEXT


async def cancel(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Cancel the current conversation."""
    await update.message.reply_text("❎ Cancelled. Send /start when you're ready again!")
    return ConversationHandler.END


async def receive_text(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Encode the text provided by the user."""
    if not update.message:
        return WAITING_FOR_TEXT

    text = update.message.text or ""
    if not text:
        await update.message.reply_text("Please send some text, or /cancel to stop.")
        return WAITING_FOR_TEXT

    await send_qr(update, context, text)
    return ConversationHandler.END


async def qr_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle `/qr <text>` in one step."""
    text = (update.message.text or "").partition(" ")[2].strip()
    if not text:
        await update.message.reply_text("Usage: /qr <text to encode>")
        return
    await send_qr(update, context, text)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------
def main() -> None:
    if not SETTINGS.bot_token:
        raise ValueError("BOT_TOKEN environment variable not set!")

    application = ApplicationBuilder().token(SETTINGS.bot_token).build()

    conversation = ConversationHandler(
        entry_points=[CommandHandler("start", start)],
        states={
            WAITING_FOR_TEXT: [MessageHandler(filters.TEXT & ~filters.COMMAND, receive_text)],
        },
        fallbacks=[CommandHandler("cancel", cancel)],
        allow_reentry=True,
    )
    application.add_handler(conversation)
    application.add_handler(CommandHandler("qr", qr_command))

    logger.info("🤖 Bot is running...")
    application.run_polling()


if __name__ == "__main__":
    main()
