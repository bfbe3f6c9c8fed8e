"""Global configuration constants."""

# Google Cloud Project ID
PROJECT_ID = "mr-funny-jokes"
PROJECT_LOCATION = "us-central1"

# Firestore collections
RATING_EVENTS_COLLECTION = "rating_events"
WEEKLY_RANKINGS_COLLECTION = "weekly_rankings"

# Weekly rankings
TOP_N = 10
RANKINGS_TIMEZONE_NAME = "America/New_York"
RANKINGS_SCHEDULE = "0 0 * * *"  # Daily at midnight Eastern
RANKINGS_RETRY_COUNT = 3

# Ratings at or above this are "hilarious", at or below the horrible max are
# "horrible"; anything between is neutral.
MIN_RATING = 1
MAX_RATING = 5
HILARIOUS_MIN_RATING = 4
HORRIBLE_MAX_RATING = 2
