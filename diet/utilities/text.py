"""Text helpers: URL slugs, initials and WhatsApp share links."""
import re
from typing import Optional
from urllib.parse import quote

_TR_ASCII = str.maketrans("ıİşŞğĞüÜöÖçÇ", "iissgguuoocc")
_NON_SLUG = re.compile(r"[^a-z0-9\s_-]")
_SEPARATORS = re.compile(r"[\s_-]+")


def slugify(text: Optional[str]) -> str:
    """URL-friendly slug; Turkish letters are folded: "Dyt. Ayşe Özkan" -> "dyt-ayse-ozkan"."""
    if not text:
        return ""
    # fold before lower(): "İ".lower() is "i" plus a combining dot
    value = str(text).translate(_TR_ASCII).lower().strip()
    value = _NON_SLUG.sub("", value)
    value = _SEPARATORS.sub("-", value)
    return value.strip("-")


def get_initials(name: Optional[str]) -> str:
    words = (name or "").split()
    if not words:
        return "??"
    if len(words) == 1:
        return words[0][:2].upper()
    return (words[0][0] + words[-1][0]).upper()


def format_phone_for_whatsapp(phone: Optional[str]) -> Optional[str]:
    """Normalize a Turkish phone number to the wa.me form (905321234567); None if unusable."""
    if not phone:
        return None
    digits = re.sub(r"\D", "", phone)
    if len(digits) < 10:
        return None
    if digits.startswith("0"):
        digits = digits[1:]
    if digits.startswith("90"):
        if len(digits) == 12:
            return digits
        if len(digits) > 12:
            return None
    if len(digits) == 10:
        return f"90{digits}"
    if len(digits) == 11 and digits.startswith("5"):
        return f"90{digits}"
    if len(digits) == 12:
        return digits
    return None


def whatsapp_url(phone: Optional[str], message: str) -> Optional[str]:
    formatted = format_phone_for_whatsapp(phone)
    if not formatted:
        return None
    return f"https://wa.me/{formatted}?text={quote(message, safe='')}"


def diet_list_message(client_name: str, content: str) -> str:
    return (f"Merhaba Sayın {client_name}, 🥗 İşte yeni diyet listeniz:\n\n"
            f"{content.strip()}\n\nSorularınız için buradayım! 👋")


def booking_request_message(owner_name: Optional[str], date_label: str, time_string: str) -> str:
    return (f"Merhaba, {owner_name or 'Diyetisyen'} ile randevu talebim oluşturuldu. "
            f"Randevu detayları: {date_label} {time_string}")
