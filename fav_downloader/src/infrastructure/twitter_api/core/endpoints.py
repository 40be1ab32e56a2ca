"""Endpoints of the Twitter v1.1 API used by the app"""

BASE_URL = 'https://api.twitter.com/1.1/'

FAVORITES_LIST = 'favorites/list.json'
ACCOUNT_SETTINGS = 'account/settings.json'

RATE_LIMIT_REMAINING_HEADER = 'x-rate-limit-remaining'

# The endpoint refuses to return more than this per request
MAX_FAVORITES_PER_PAGE = 200
