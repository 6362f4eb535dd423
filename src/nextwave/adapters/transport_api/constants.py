"""Constants for the transport.opendata.ch adapter.

API Documentation: https://transport.opendata.ch/docs.html
"""

STATIONBOARD_PATH = "stationboard"

# Category code the backend uses for boat services
BOAT_CATEGORY = "BAT"

# Departures less than this many minutes ahead are shown as leaving now
NOW_WINDOW_MINUTES = 5

UNKNOWN_DESTINATION = "Unknown"

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"

DEFAULT_HEADERS = {
    "Accept": "application/json",
}
