import io
from datetime import datetime

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

COLOR_DEEP_NAVY = colors.HexColor("#0f172a")
COLOR_ROW_ALT = colors.HexColor("#f8fafc")
ROW_HEIGHT = 18
MAX_SITE_NAME = 240


def _draw_wrapped_text(c, text, x, y, max_width, line_height, font="Helvetica", size=9):
    """Helper to manually wrap text within a specific width on the PDF."""
    if not text:
        return y - line_height
    words = str(text).split(' ')
    line = ""
    for word in words:
        if c.stringWidth(line + word + " ", font, size) < max_width:
            line += word + " "
        else:
            c.drawString(x, y, line)
            line = word + " "
            y -= line_height
    c.drawString(x, y, line)
    return y - line_height


def _fmt(value, digits=None, suffix=""):
    if value is None or value == "":
        return "N/A"
    if digits is not None:
        try:
            return f"{float(value):.{digits}f}{suffix}"
        except (TypeError, ValueError):
            return str(value)
    return f"{value}{suffix}"


def _result_rows(r):
    landuse = ", ".join(str(l.get("value")) for l in (r.get("landuse") or []) if l.get("value"))
    return [
        ("Latitude", _fmt(r.get("lat"), 4)),
        ("Longitude", _fmt(r.get("lon"), 4)),
        ("Elevation (m)", _fmt(r.get("elevation_m"))),
        ("Slope (deg)", _fmt(r.get("slope_deg"), 2)),
        ("Rainfall (3d)", _fmt(r.get("rainfall_3d_mm"), suffix=" mm")),
        ("Nearest Road", _fmt(r.get("nearest_road_m"), 0, " m")),
        ("Landuse", landuse or "N/A"),
        ("Suitability Score", _fmt(r.get("suitability_score"))),
    ]


def _draw_table(c, rows, x, y, width):
    """Two-column Field/Value table with a navy header row."""
    c.setFillColor(COLOR_DEEP_NAVY)
    c.rect(x, y - ROW_HEIGHT, width, ROW_HEIGHT, fill=1, stroke=0)
    c.setFillColor(colors.white)
    c.setFont("Helvetica-Bold", 9)
    c.drawString(x + 8, y - 13, "Field")
    c.drawString(x + 160, y - 13, "Value")
    y -= ROW_HEIGHT

    c.setFont("Helvetica", 9)
    for i, (field, value) in enumerate(rows):
        if i % 2:
            c.setFillColor(COLOR_ROW_ALT)
            c.rect(x, y - ROW_HEIGHT, width, ROW_HEIGHT, fill=1, stroke=0)
        c.setFillColor(colors.black)
        c.drawString(x + 8, y - 13, field)
        c.drawString(x + 160, y - 13, str(value)[:80])
        y -= ROW_HEIGHT
    return y


def _start_page(c, width, height, margin, title="Terrain Investment Analysis"):
    """Page heading; returns the y position below it."""
    y = height - 60
    c.setFont("Helvetica-Bold", 14)
    c.setFillColor(COLOR_DEEP_NAVY)
    c.drawString(margin, y, title)
    c.setFont("Helvetica", 8)
    c.setFillColor(colors.grey)
    c.drawRightString(width - margin, y, datetime.now().strftime("%Y-%m-%d %H:%M"))
    c.setFillColor(colors.black)
    return y


def generate_terrain_report(results):
    """
    Render analysis results to PDF, one page per site.
    Returns a BytesIO positioned at 0.
    """
    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    width, height = A4
    margin = 40

    if not results:
        y = _start_page(c, width, height, margin)
        c.setFont("Helvetica", 10)
        c.drawString(margin, y - 20, "No analysis results stored yet.")
        c.showPage()

    for idx, r in enumerate(results or []):
        site_name = str(r.get("site_name") or "Unnamed site")[:MAX_SITE_NAME]
        y = _start_page(c, width, height, margin) - 22
        c.setFont("Helvetica-Bold", 11)
        y = _draw_wrapped_text(c, f"{idx + 1}. {site_name}", margin, y, width - 2 * margin, 14,
                               font="Helvetica-Bold", size=11)

        y = _draw_table(c, _result_rows(r), margin, y, width - 2 * margin)

        actions = r.get("recommended_actions") or []
        if actions:
            y -= 20
            c.setFont("Helvetica-Bold", 10)
            c.drawString(margin, y, "Recommended Actions:")
            y -= 14
            c.setFont("Helvetica", 9)
            for act in actions:
                if y < margin + 24:
                    c.showPage()
                    y = _start_page(c, width, height, margin, f"{site_name[:60]} (continued)") - 24
                    c.setFont("Helvetica", 9)
                y = _draw_wrapped_text(c, f"- {act}", margin + 8, y, width - 2 * margin - 8, 12)

        c.showPage()

    c.save()
    buffer.seek(0)
    return buffer
