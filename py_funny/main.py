"""Cloud Functions entry point."""

import logging

from common import firebase_init
from functions import ranking_fns

# Configure basic logging for the application (primarily for emulator visibility)
logging.basicConfig(level=logging.INFO)

app = firebase_init.app

# Export the weekly rankings functions
aggregate_rankings = ranking_fns.aggregate_rankings
trigger_aggregation = ranking_fns.trigger_aggregation
