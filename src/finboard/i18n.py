"""Labels and value formatting for exported documents."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from .constants import CANCELLED, COMPLETED, CURRENCIES, EXPENSE, INCOME, PENDING

DATE_FORMAT = "%d/%m/%Y"
SHORT_DATE_FORMAT = "%d/%m"

LABELS: dict[str, dict[str, str]] = {
    "en": {
        "date": "Date",
        "description": "Description",
        "category": "Category",
        "amount": "Amount",
        "type": "Type",
        "status": "Status",
        INCOME: "Income",
        EXPENSE: "Expense",
        PENDING: "Pending",
        COMPLETED: "Completed",
        CANCELLED: "Cancelled",
        "report_title": "Financial Report",
        "period": "Period: {start} to {end}",
        "summary": "Financial Summary",
        "total_income": "Total income",
        "total_expense": "Total expenses",
        "balance": "Balance",
        "expenses_by_category": "Expenses by Category",
        "no_expenses": "No expenses in this period.",
    },
    "pt_BR": {
        "date": "Data",
        "description": "Descrição",
        "category": "Categoria",
        "amount": "Valor",
        "type": "Tipo",
        "status": "Status",
        INCOME: "Receita",
        EXPENSE: "Despesa",
        PENDING: "Pendente",
        COMPLETED: "Concluída",
        CANCELLED: "Cancelada",
        "report_title": "Relatório Financeiro",
        "period": "Período: {start} a {end}",
        "summary": "Resumo Financeiro",
        "total_income": "Receitas Totais",
        "total_expense": "Despesas Totais",
        "balance": "Saldo",
        "expenses_by_category": "Despesas por Categoria",
        "no_expenses": "Nenhuma despesa no período.",
    },
}


def label(locale: str, key: str) -> str:
    """Look up ``key`` for ``locale``, falling back to English and then the key itself."""

    table = LABELS.get(locale) or LABELS["en"]
    return table.get(key) or LABELS["en"].get(key, key)


def format_date(value: date, *, short: bool = False) -> str:
    return value.strftime(SHORT_DATE_FORMAT if short else DATE_FORMAT)


def format_amount(value: Decimal) -> str:
    """Plain two-place decimal, no grouping, as used in CSV cells."""

    return f"{Decimal(value):.2f}"


def format_currency(value: Decimal, currency: str = "BRL", locale: str = "en") -> str:
    """Render a money value with its currency symbol.

    ``pt_BR`` uses ``.`` for thousands and ``,`` for decimals.
    """

    symbol = CURRENCIES.get(currency, currency)
    amount = Decimal(value)
    prefix = "-" if amount < 0 else ""
    grouped = f"{abs(amount):,.2f}"
    if locale == "pt_BR":
        grouped = grouped.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{prefix}{symbol} {grouped}"
