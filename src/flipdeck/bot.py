"""Telegram presentation of the flashcard viewer."""
import asyncio
import html
import logging
from typing import List, Optional

from telegram import InlineKeyboardButton, InlineKeyboardMarkup, Update
from telegram.error import TelegramError
from telegram.ext import CallbackContext

from flipdeck.config import settings
from flipdeck.models.base import SessionLocal
from flipdeck.models.card_models import CardSide, Outcome
from flipdeck.monitoring import error_count, sessions_opened
from flipdeck.services.progress_service import ProgressStore
from flipdeck.services.session_service import ReviewSession
from flipdeck.services.storage_service import StorageService

# Get logger for this module
logger = logging.getLogger(__name__)

# Button texts
FLIP = "🔄 Flip"
BACK = "⬅️ Back"
SKIP = "Skip ➡️"
SHOW_ENTRIES = "☰ Show entries"
HIDE_ENTRIES = "☰ Hide entries"
PRONOUNCE = "🔊 Pronounce"
RESET_PROGRESS = "🗑 Reset progress"

GRADE_BUTTONS = {
    Outcome.AGAIN: "🔁 Again",
    Outcome.GOOD: "👍 Good",
    Outcome.EASY: "🌟 Easy",
}

ERR_MSG_NO_SESSION = "Please /start first to open the deck"


def progress_slot(chat_id: int) -> str:
    """Persistence slot of a chat."""
    return f"{settings.database.progress_slot}:{chat_id}"


async def log_received(update: Update, context_type: str) -> None:
    """Log message."""
    txt = ""
    if update.callback_query:
        txt = f" {update.callback_query.data}"
    elif update.message:
        txt = f" {update.message.text}"
    logger.info(f"Received @{context_type:8} from chat {update.effective_chat.id}{txt}")


def create_session(update: Update, context: CallbackContext) -> ReviewSession:
    """Open a fresh review session for the chat, starting at the first entry."""
    old_session = context.chat_data.get("session")
    if old_session:
        old_session.close()
    sessions_opened.inc()

    progress = ProgressStore(StorageService(SessionLocal()), progress_slot(update.effective_chat.id))
    session = ReviewSession(
        context.bot_data["entries"],
        progress,
        resource_dir=settings.paths.resource_dir,
    )
    context.chat_data["session"] = session
    return session


def render_front(session: ReviewSession) -> str:
    face = session.front()
    lines = [
        f"<b>{html.escape(face.main_word)}</b>",
        "",
        f"🎨 {html.escape(face.stripe_color)}",
    ]
    if face.image_url:
        lines.append(f"🖼 {html.escape(face.image_url)}")
    return "\n".join(lines)


def render_back(session: ReviewSession) -> str:
    face = session.back()
    lines = [
        f"#{face.entry_id} <b>{html.escape(face.main_word)}</b> {html.escape(face.ipa)}",
        f"<i>{html.escape(face.part_of_speech)}</i> · {html.escape(face.group)}",
        "",
        f"{html.escape(face.translation)} ({html.escape(face.transliteration)})",
    ]
    if face.sentence:
        lines.extend(["", f"💬 {html.escape(face.sentence)}"])
    lines.extend(["", f"📈 {face.status}"])
    return "\n".join(lines)


def render_entries(session: ReviewSession) -> str:
    """Entry list, one line per entry, current entry marked."""
    due_ids = session.progress.due_entries(entry.id for entry in session.entries)
    lines = [f"Due today: {len(due_ids)}/{len(session.entries)}"]
    for row in session.entry_rows():
        marker = "▶" if row.highlighted else " "
        due_text = f" (due {row.due_date})" if row.due_date else ""
        lines.append(f"{marker} {row.entry_id:>3} {row.main_word} — {row.status}{due_text}")
    return "<pre>" + html.escape("\n".join(lines)) + "</pre>"


def render_card(session: ReviewSession) -> str:
    text = render_front(session) if session.side == CardSide.FRONT else render_back(session)
    if session.entries_visible:
        text = f"{text}\n\n{render_entries(session)}"
    return text


def build_keyboard(session: ReviewSession) -> InlineKeyboardMarkup:
    keyboard: List[List[InlineKeyboardButton]] = [
        [InlineKeyboardButton(FLIP, callback_data="flip")],
        [InlineKeyboardButton(BACK, callback_data="back"),
         InlineKeyboardButton(SKIP, callback_data="skip")],
        [InlineKeyboardButton(label, callback_data=f"grade_{outcome.value}")
         for outcome, label in GRADE_BUTTONS.items()],
    ]
    if session.side == CardSide.BACK and session.back().audio_url:
        keyboard.append([InlineKeyboardButton(PRONOUNCE, callback_data="pronounce")])

    toggle_text = HIDE_ENTRIES if session.entries_visible else SHOW_ENTRIES
    keyboard.append([InlineKeyboardButton(toggle_text, callback_data="toggle_entries")])

    if session.entries_visible:
        per_row = settings.card.entries_per_row
        buttons = [
            InlineKeyboardButton(
                f"• {row.entry_id}" if row.highlighted else str(row.entry_id),
                callback_data=f"jump_{row.index}",
            )
            for row in session.entry_rows()
        ]
        keyboard.extend(buttons[i:i + per_row] for i in range(0, len(buttons), per_row))
        keyboard.append([InlineKeyboardButton(RESET_PROGRESS, callback_data="reset_progress")])

    return InlineKeyboardMarkup(keyboard)


async def send_card(update: Update, session: ReviewSession, delay: float = 0.0) -> None:
    """Show the session's card, editing the existing message for button presses.

    `delay` postpones the content swap so it lands mid-flip.
    """
    if delay > 0:
        await asyncio.sleep(delay)

    text = render_card(session)
    reply_markup = build_keyboard(session)

    if update.callback_query:
        try:
            await update.callback_query.edit_message_text(
                text,
                reply_markup=reply_markup,
                parse_mode="HTML",
            )
        except TelegramError as e:
            logger.warning(f"Error updating card: {e}")
    else:
        await update.message.reply_text(
            text,
            reply_markup=reply_markup,
            parse_mode="HTML",
        )


async def handle_start(update: Update, context: CallbackContext) -> None:
    """Open the deck at its first entry."""
    await log_received(update, "start")

    session = create_session(update, context)
    try:
        await send_card(update, session)
        await send_image_file(update, session.front().image_url, context)
    finally:
        session.close()


async def handle_callback(update: Update, context: CallbackContext) -> None:
    """Handle callback queries from the card keyboard."""
    query = update.callback_query
    await query.answer()

    await log_received(update, "callback")

    session: Optional[ReviewSession] = context.chat_data.get("session")
    if not session:
        await query.edit_message_text(ERR_MSG_NO_SESSION)
        return

    try:
        was_back = session.side == CardSide.BACK
        moved = True

        if query.data == "flip":
            session.flip()
            moved = False
        elif query.data == "back":
            session.previous()
        elif query.data == "skip":
            session.skip()
        elif query.data.startswith("grade_"):
            session.grade(Outcome.parse(query.data.removeprefix("grade_")))
        elif query.data.startswith("jump_"):
            session.jump_to(int(query.data.removeprefix("jump_")))
        elif query.data == "toggle_entries":
            session.toggle_entries()
            moved = False
        elif query.data == "reset_progress":
            session.reset_progress()
            moved = False
        elif query.data == "pronounce":
            await send_audio_file(update, session.back().audio_url, context)
            return
        else:
            logger.warning(f"Unknown callback data: {query.data}")
            return

        # Content changes while the card is turned, half-way through the flip
        delay = settings.card.content_swap_delay if moved and was_back else 0.0
        await send_card(update, session, delay)
        if moved:
            await send_image_file(update, session.front().image_url, context)
    finally:
        session.close()


async def handle_message(update: Update, context: CallbackContext) -> None:
    """Handle text messages."""
    await log_received(update, "message")
    await update.message.reply_text("Use the card buttons, or /start to open the deck")


def is_remote(reference: str) -> bool:
    """URLs are handed to Telegram as-is; everything else is a local file."""
    return "://" in reference


def reply_message(update: Update):
    return update.callback_query.message if update.callback_query else update.message


async def delete_previous(update: Update, context: CallbackContext, key: str) -> None:
    """Delete the chat's previous media message stored under `key`."""
    message_id = context.chat_data.pop(key, None)
    if not message_id:
        return
    try:
        await reply_message(update).chat.delete_message(message_id)
    except TelegramError as e:
        logger.warning(f"Error deleting media message: {e}")


async def send_audio_file(update: Update, audio_file_path: str, context: CallbackContext) -> None:
    """Send an audio file or URL to the chat, replacing the previously sent one."""
    message = reply_message(update)
    await delete_previous(update, context, "last_audio_message_id")

    try:
        if is_remote(audio_file_path):
            sent = await message.reply_audio(audio_file_path)
        else:
            with open(audio_file_path, "rb") as audio:
                sent = await message.reply_audio(audio)
        context.chat_data["last_audio_message_id"] = sent.message_id
    except (OSError, TelegramError) as e:
        logger.error(f"Error sending audio file {audio_file_path}: {e}")
        error_count.labels(error_type="audio").inc()
        await message.reply_text("Sorry, I couldn't send the audio file.")


async def send_image_file(update: Update, image_url: str, context: CallbackContext) -> None:
    """Show the front image of the card below it, replacing the previous one."""
    await delete_previous(update, context, "last_image_message_id")
    if not image_url:
        return

    try:
        if is_remote(image_url):
            sent = await reply_message(update).reply_photo(image_url)
        else:
            with open(image_url, "rb") as photo:
                sent = await reply_message(update).reply_photo(photo)
        context.chat_data["last_image_message_id"] = sent.message_id
    except (OSError, TelegramError) as e:
        logger.warning(f"Error sending image {image_url}: {e}")
        error_count.labels(error_type="image").inc()


async def handle_error(update: object, context: CallbackContext) -> None:
    """Log errors raised by handlers."""
    error_count.labels(error_type=type(context.error).__name__).inc()
    logger.error("Error while handling update", exc_info=context.error)
