"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

USERS_KEY = "journal.users"
SESSION_KEY = "journal.session"
STUDENTS_KEY = "journal.students"
SESSIONS_KEY = "journal.sessions"

STORAGE_KEYS = (USERS_KEY, SESSION_KEY, STUDENTS_KEY, SESSIONS_KEY)

MIN_PASSWORD_LENGTH = 6
DEFAULT_TIMESLOT = "08:30 — 10:05"

LEGACY_ADMIN_ID = "admin-1"
LEGACY_ADMIN_EMAIL = "admin@misis.ru"
LEGACY_ADMIN_NAME_MARKER = "МИСиС"
ADMIN_DISPLAY_NAME = "Администратор МИСИС"
