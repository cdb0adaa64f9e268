"""Global constants for the planpal application."""

# Key-value collections (key prefixes)
PROFILES = "profiles"
CREDENTIALS = "credentials"
GROUPS = "groups"
EVENTS = "events"
POLLS = "polls"
RSVPS = "rsvps"
REDEMPTIONS = "redemptions"
LEDGER = "ledger"
CHATS = "chats"

KEY_SEPARATOR = ":"

# Store
DEFAULT_TRANSACTION_ATTEMPTS = 5

# Polls
MIN_POLL_OPTIONS = 2
POLL_TYPES = ("general", "movie", "restaurant", "location")
MAX_EMOJI_LENGTH = 16

# Events
EVENT_TYPES = ("movie", "food", "hangout")
RSVP_STATUSES = ("going", "maybe", "not-going")
MOODS = ("chill", "adventurous", "foodie", "romantic", "scary", "dramatic")

# Rewards
POINTS_PER_LEVEL = 50
CASHBACK_RATE = 0.10

# Suggestions
SUGGESTION_LIMIT = 10
DEFAULT_SUGGESTION_TIMEOUT = 10
DEFAULT_LLM_TIMEOUT = 30
