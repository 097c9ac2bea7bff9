from typing import Final

DATE_FORMAT: Final[str] = "%Y-%m-%d"
TIME_FORMAT: Final[str] = "%H:%M"

# Fixed serialization order; keys never change with the display language.
DAY_KEYS: Final[tuple[str, ...]] = (
    "pazartesi", "sali", "carsamba", "persembe", "cuma", "cumartesi", "pazar",
)
DAY_LABELS: Final[dict[str, str]] = {
    "pazartesi": "PAZARTESİ",
    "sali": "SALI",
    "carsamba": "ÇARŞAMBA",
    "persembe": "PERŞEMBE",
    "cuma": "CUMA",
    "cumartesi": "CUMARTESİ",
    "pazar": "PAZAR",
}

MEAL_KEYS: Final[tuple[str, ...]] = ("breakfast", "lunch", "snack", "dinner")
MEAL_LABELS: Final[dict[str, str]] = {
    "breakfast": "KAHVALTI",
    "lunch": "ÖĞLE",
    "snack": "ARA ÖĞÜN",
    "dinner": "AKŞAM",
}
NOTES_LABEL: Final[str] = "NOTLAR"

MODE_DAILY: Final[str] = "daily"
MODE_WEEKLY: Final[str] = "weekly"

# Appointment lifecycle
STATUS_PENDING: Final[str] = "pending"
STATUS_APPROVED: Final[str] = "approved"
STATUS_CONFIRMED: Final[str] = "confirmed"  # legacy alias of approved
STATUS_COMPLETED: Final[str] = "completed"
STATUS_CANCELLED: Final[str] = "cancelled"
STATUS_REJECTED: Final[str] = "rejected"

APPOINTMENT_STATUSES: Final[tuple[str, ...]] = (
    STATUS_PENDING, STATUS_APPROVED, STATUS_CONFIRMED,
    STATUS_COMPLETED, STATUS_CANCELLED, STATUS_REJECTED,
)
BLOCKING_STATUSES: Final[frozenset[str]] = frozenset({STATUS_PENDING, STATUS_APPROVED, STATUS_CONFIRMED})
TERMINAL_STATUSES: Final[frozenset[str]] = frozenset({STATUS_COMPLETED, STATUS_CANCELLED, STATUS_REJECTED})

APPOINTMENT_STATUS_LABELS: Final[dict[str, str]] = {
    STATUS_PENDING: "Bekliyor",
    STATUS_APPROVED: "Onaylandı",
    STATUS_CONFIRMED: "Onaylandı",
    STATUS_COMPLETED: "Tamamlandı",
    STATUS_CANCELLED: "İptal Edildi",
    STATUS_REJECTED: "Reddedildi",
}

TR_MONTHS: Final[tuple[str, ...]] = (
    "Ocak", "Şubat", "Mart", "Nisan", "Mayıs", "Haziran",
    "Temmuz", "Ağustos", "Eylül", "Ekim", "Kasım", "Aralık",
)

DIET_TEMPLATE: Final[str] = (
    """KAHVALTI:
•
•
•

ÖĞLE:
•
•
•

ARA ÖĞÜN:
•
•

AKŞAM:
•
•
•

NOTLAR:
• """
)
