APP_NAME = "Cashflow"
APP_WIDTH = 1200
APP_HEIGHT = 750
DB_FILE = "cashflow.db"

DEFAULT_USER_ID = "local"
DEFAULT_ACCOUNT_TYPE = "cash"
CURRENCY_SYMBOL = "€"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# Engine defaults, overridable from ~/.cashflow/config.json
RECURRENCE_MAX_STEPS = 60       # next_occurrence calls per movement before giving up
PROJECTION_UPCOMING_LIMIT = 6   # projected points appended after the historical walk
LEDGER_DISPLAY_LIMIT = 12       # rows shown in the past/upcoming tables

SEVERITY_COLORS = {
    "error":   "#F44336",
    "warning": "#FF9800",
    "info":    "#2196F3",
}

ACCOUNT_TYPE_COLORS = {
    "cash":    "#4CAF50",
    "bank":    "#2196F3",
    "savings": "#009688",
    "assets":  "#9C27B0",
}
