"""SOS alert policy constants."""

from __future__ import annotations

# Map link sent in every alert, coordinates substituted positionally
MAP_LINK_TEMPLATE = "https://maps.google.com/?q={},{}"

# Fixed preamble prepended to the map link
SOS_MESSAGE_PREFIX = "🚨 EMERGENCY SOS! Location: "

# Name used when a recipient was submitted without one
DEFAULT_CONTACT_NAME = "Emergency Contact"

# Coordinate bounds (degrees)
LAT_RANGE = (-90.0, 90.0)
LNG_RANGE = (-180.0, 180.0)

# Recent SOS events listing
DEFAULT_EVENTS_LIMIT = 20
MAX_EVENTS_LIMIT = 100
