"""
Centralized value sets used by forms, models and the default category seed.
"""

INCOME = "income"
EXPENSE = "expense"
KINDS = (INCOME, EXPENSE)

PENDING = "pending"
COMPLETED = "completed"
CANCELLED = "cancelled"
STATUSES = (PENDING, COMPLETED, CANCELLED)

CURRENCIES = {
    "BRL": "R$",
    "USD": "$",
    "EUR": "€",
}

UNCATEGORIZED = "Uncategorized"
UNCATEGORIZED_COLOR = "#9CA3AF"

# (name, kind, color, icon)
DEFAULT_CATEGORIES = [
    ("Salary", INCOME, "#10B981", "briefcase"),
    ("Freelance", INCOME, "#3B82F6", "laptop"),
    ("Investments", INCOME, "#8B5CF6", "trending-up"),
    ("Other Income", INCOME, "#14B8A6", "plus-circle"),
    ("Housing", EXPENSE, "#EF4444", "home"),
    ("Groceries", EXPENSE, "#F59E0B", "shopping-cart"),
    ("Dining Out", EXPENSE, "#EC4899", "coffee"),
    ("Transportation", EXPENSE, "#6366F1", "car"),
    ("Utilities", EXPENSE, "#0EA5E9", "zap"),
    ("Health", EXPENSE, "#22C55E", "heart"),
    ("Entertainment", EXPENSE, "#A855F7", "film"),
    ("Other Expenses", EXPENSE, "#64748B", "more-horizontal"),
]
