APP_NAME = "Pocket Ledger"
APP_WIDTH = 1100
APP_HEIGHT = 720
DB_FILE = "pocket_ledger.db"

DATE_FORMAT = "%Y-%m-%d"
MONTH_FORMAT = "%Y-%m"

TRANSACTION_TYPES = ("income", "expense")
CATEGORY_TYPES = ("income", "expense")
RECURRING_FREQUENCIES = ("daily", "weekly", "monthly", "yearly")
GRANULARITIES = ("day", "week", "month")

BUDGET_WARNING_PCT = 80
BUDGET_LIMIT_PCT = 100

STATUS_NORMAL = "normal"
STATUS_WARNING = "warning"
STATUS_OVER = "over"

FALLBACK_CATEGORY_NAME = "Other"
UNKNOWN_CATEGORY_NAME = "Unknown"
FALLBACK_COLOR = "#6B7280"
FALLBACK_ICON = "Package"
DEFAULT_CUSTOM_ICON = "Tag"
DEFAULT_CUSTOM_COLOR = "#3B82F6"

DEFAULT_PASSCODE = "ledger"

DEFAULT_CATEGORIES = [
    {"name": "Food & Dining",      "type": "expense", "icon": "Utensils",    "color": "#F87171"},
    {"name": "Transportation",     "type": "expense", "icon": "Car",         "color": "#FB923C"},
    {"name": "Entertainment",      "type": "expense", "icon": "Popcorn",     "color": "#FBBF24"},
    {"name": "Bills & Utilities",  "type": "expense", "icon": "Zap",         "color": "#10B981"},
    {"name": "Shopping",           "type": "expense", "icon": "ShoppingBag", "color": "#06B6D4"},
    {"name": "Healthcare",         "type": "expense", "icon": "Heart",       "color": "#EC4899"},
    {"name": "Education",          "type": "expense", "icon": "BookOpen",    "color": "#8B5CF6"},
    {"name": "Other Expenses",     "type": "expense", "icon": "Package",     "color": "#6B7280"},
    {"name": "Salary",             "type": "income",  "icon": "Briefcase",   "color": "#10B981"},
    {"name": "Freelance",          "type": "income",  "icon": "Laptop",      "color": "#3B82F6"},
    {"name": "Investment Returns", "type": "income",  "icon": "TrendingUp",  "color": "#8B5CF6"},
    {"name": "Bonus",              "type": "income",  "icon": "Gift",        "color": "#FBBF24"},
    {"name": "Other Income",       "type": "income",  "icon": "DollarSign",  "color": "#10B981"},
]

STATUS_COLORS = {
    STATUS_NORMAL:  "#4CAF50",
    STATUS_WARNING: "#FF9800",
    STATUS_OVER:    "#F44336",
}

TYPE_COLORS = {
    "income":  "#4CAF50",
    "expense": "#F44336",
}
