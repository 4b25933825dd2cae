"""Application-wide constants.

These are fixed values that don't change between environments.
For configurable values, see config.py Settings.
"""

# ─────────────────────────────────────────────────────────────
# YH Finance (RapidAPI) endpoints
# ─────────────────────────────────────────────────────────────
YH_FINANCE_HOST = "yh-finance.p.rapidapi.com"
YH_FINANCE_BASE_URL = f"https://{YH_FINANCE_HOST}"
YH_FINANCE_QUOTES_PATH = "/market/v2/get-quotes"
YH_FINANCE_CHART_PATH = "/stock/v3/get-chart"
YH_FINANCE_REGION = "US"
YH_FINANCE_CHART_INTERVAL = "1d"  # daily closes only

# Request headers expected by RapidAPI
RAPIDAPI_HOST_HEADER = "x-rapidapi-host"
RAPIDAPI_KEY_HEADER = "x-rapidapi-key"

# ─────────────────────────────────────────────────────────────
# Defaults (can be overridden in Settings)
# ─────────────────────────────────────────────────────────────
DEFAULT_HTTP_TIMEOUT_SECONDS = 30.0
DEFAULT_SYMBOL = "NFLX"
DEFAULT_RANGE = "1mo"
DEFAULT_PERCENT_CHANGE_LIMIT = 20.0  # +/- bound of the percent slider

# ─────────────────────────────────────────────────────────────
# User-facing alert messages
# ─────────────────────────────────────────────────────────────
ALERT_INVALID_SYMBOL = "Invalid Symbol"
ALERT_UNAUTHORIZED = "Quote provider rejected the API key"
ALERT_RATE_LIMITED = "Quote provider rate limit reached, try again shortly"
ALERT_UNAVAILABLE = "Quote provider is unreachable"
ALERT_INVALID_RESPONSE = "Quote provider returned an unreadable response"
ALERT_NO_RANGE_DATA = "No price history for the selected range"
