"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
DEFAULT_CURRENCY = "XOF"
DEFAULT_LOG_LIMIT = 100
DEFAULT_PHOTO_URL = "https://i.postimg.cc/xdLntsjG/Chat-GPT-Image-27-juil-2025-19-35-13.png"
MIN_PASSWORD_LENGTH = 6
ONLINE_WINDOW_SECONDS = 5 * 60
COMPANY_IDENTIFIER_PREFIX = "EPT-"
REGISTRATION_CODE_DIGITS = 10

FRENCH_MONTHS = (
    "janvier", "février", "mars", "avril", "mai", "juin",
    "juillet", "août", "septembre", "octobre", "novembre", "décembre",
)
FRENCH_MONTHS_SHORT = (
    "janv.", "févr.", "mars", "avr.", "mai", "juin",
    "juil.", "août", "sept.", "oct.", "nov.", "déc.",
)
FRENCH_WEEKDAYS = ("lundi", "mardi", "mercredi", "jeudi", "vendredi", "samedi", "dimanche")
