import io
from typing import List
from xml.sax.saxutils import escape
from reportlab.lib.pagesizes import A4
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

from chefgenie.domain.ShoppingList import ShoppingListItem
from chefgenie.logic.shopping.display import (
    estimated_total, group_by_store, item_display, item_price_display, item_recipes
)
from chefgenie.utilities.constants import ANY


def generate_pdf_for_shopping_list(items: List[ShoppingListItem], shop_at: str = ANY) -> bytes:
    """Generate a PDF with one table per store: Item / Price / Recipes / Done."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=A4,
        rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20
    )

    styles = getSampleStyleSheet()
    elements = [
        Paragraph("Shopping List", styles["Title"]),
        Spacer(1, 12),
    ]
    if not items:
        elements.append(Paragraph("Your shopping list is empty.", styles["Normal"]))

    for store, group in group_by_store(items, shop_at).items():
        elements.append(Paragraph(escape(store), styles["Heading2"]))
        data = [["Item", "Price", "Recipes", "Done"]]
        for item in group:
            data.append([
                Paragraph(escape(item_display(item)), styles["Normal"]),
                item_price_display(item) or "",
                Paragraph(escape(item_recipes(item)), styles["Normal"]),
                "x" if item.checked else "",
            ])
        table = Table(data, repeatRows=1, colWidths=[230, 70, 200, 40])
        table.setStyle(TableStyle([
            ("BACKGROUND", (0,0), (-1,0), colors.HexColor("#4CAF50")),
            ("TEXTCOLOR", (0,0), (-1,0), colors.whitesmoke),
            ("ALIGN", (1,0), (-1,-1), "CENTER"),
            ("VALIGN", (0,0), (-1,-1), "MIDDLE"),
            ("FONTNAME", (0,0), (-1,0), "Helvetica-Bold"),
            ("FONTSIZE", (0,0), (-1,0), 11),
            ("BOTTOMPADDING", (0,0), (-1,0), 8),
            ("GRID", (0,0), (-1,-1), 0.5, colors.grey),
        ]))
        elements.append(table)
        elements.append(Spacer(1, 12))

    total = estimated_total(items)
    if total > 0 and shop_at == ANY:
        elements.append(Paragraph(f"Estimated total: ${total:.2f}", styles["Heading3"]))

    doc.build(elements)
    return buf.getvalue()
