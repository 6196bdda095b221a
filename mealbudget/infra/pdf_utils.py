import io
from reportlab.lib.pagesizes import A4, landscape
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

from mealbudget.logic.planning.week_keys import week_label
from mealbudget.logic.shopping.aggregator import format_amount, format_money, item_cost, total
from mealbudget.utilities.constants import DAYS_OF_WEEK, MEAL_SLOTS

HEADER_STYLE = [
    ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#667eea")),
    ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
    ("ALIGN", (0, 0), (-1, -1), "CENTER"),
    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
    ("FONTSIZE", (0, 0), (-1, 0), 12),
    ("BOTTOMPADDING", (0, 0), (-1, 0), 10),
    ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
]


def _cell_text(slot) -> str:
    if slot is None:
        return "-"
    return f"{slot.meal.name} ({format_money(slot.meal.estimated_cost)})"


def generate_pdf_for_week(grid, ledger=None):
    """Week table (Day / Breakfast / Lunch / Dinner) with meal costs and the budget summary."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=landscape(A4),
        rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20
    )

    styles = getSampleStyleSheet()
    elements = [
        Paragraph(f"Meal Plan – {week_label(grid.start)}", styles["Title"]),
        Spacer(1, 16),
    ]

    data = [["Day"] + [s.capitalize() for s in MEAL_SLOTS]]
    for day_name, day in zip(DAYS_OF_WEEK, grid.days):
        data.append([f"{day_name} ({day.strftime('%d.%m.%Y')})"]
                    + [_cell_text(grid.cell(day, s)) for s in MEAL_SLOTS])

    table = Table(data, repeatRows=1)
    table.setStyle(TableStyle(HEADER_STYLE))
    elements.append(table)

    if ledger is not None:
        elements.append(Spacer(1, 16))
        budget_text = format_money(ledger.budget) if ledger.budget > 0 else "not set"
        line = f"Budget: {budget_text} | Used: {format_money(ledger.used)} | Left: {format_money(ledger.left)}"
        if ledger.over_budget:
            line += " | OVER BUDGET"
        elements.append(Paragraph(line, styles["Normal"]))

    doc.build(elements)
    return buf.getvalue()


def generate_pdf_for_grocery_list(items, title: str = "Grocery list"):
    """Grocery list with amounts, sources and the remaining-to-buy total."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=A4, rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20)
    styles = getSampleStyleSheet()
    elements = [Paragraph(title, styles["Title"]), Spacer(1, 16)]

    data = [["", "Item", "Amount", "From", "Cost"]]
    for item in items:
        cost = item_cost(item)
        data.append([
            "x" if item.checked else "",
            item.name,
            format_amount(item.amount),
            ", ".join(item.source),
            format_money(cost) if cost > 0 else "",
        ])
    table = Table(data, repeatRows=1)
    table.setStyle(TableStyle(HEADER_STYLE))
    elements.append(table)
    elements.append(Spacer(1, 12))
    elements.append(Paragraph(f"Total: {format_money(total(items))}", styles["Normal"]))

    doc.build(elements)
    return buf.getvalue()
