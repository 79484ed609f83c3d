"""
Estimate PDF Generator
Renders the estimate stored on a quote request as a one-page A4 quotation
"""

import io
import logging
from datetime import datetime
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.cidfonts import UnicodeCIDFont
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ..config import COMPANY_PROFILE
from ..models import QuoteRequest
from ..shared.numbers import format_price_jpy

logger = logging.getLogger(__name__)

# Built-in CID font, so customer names in Japanese render without shipping font files
FONT_NAME = "HeiseiKakuGo-W5"
pdfmetrics.registerFont(UnicodeCIDFont(FONT_NAME))

BREAKDOWN_ROWS = [
    ("basePrice", "Base fare"),
    ("cargoPrice", "Cargo"),
    ("optionPrice", "Options"),
    ("distancePrice", "Distance"),
    ("timeSurcharge", "Time surcharge"),
    ("seasonAdjustment", "Season adjustment"),
]


class EstimatePDFGenerator:
    """Generate quotation PDFs for quote requests"""

    def __init__(self, quote: QuoteRequest, company: dict = None):
        if not quote.estimate_breakdown:
            raise ValueError("Quote request has no estimate")

        self.quote = quote
        self.breakdown = quote.estimate_breakdown
        self.company = company or COMPANY_PROFILE

        # PDF settings
        self.page_width, self.page_height = A4
        self.margin = 18 * mm

        self.brand_color = colors.HexColor("#1d4ed8")
        self.dark_gray = colors.HexColor("#1e293b")
        self.light_gray = colors.HexColor("#f1f5f9")

    def generate(self) -> bytes:
        """Generate PDF and return bytes"""
        logger.info(f"Generating estimate PDF for quote request {self.quote.id}")

        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=self.margin,
            leftMargin=self.margin,
            topMargin=self.margin,
            bottomMargin=self.margin,
            title=f"Estimate {self.quote.id}",
        )

        styles = getSampleStyleSheet()
        title_style = ParagraphStyle(
            "EstimateTitle",
            parent=styles["Heading1"],
            fontName=FONT_NAME,
            fontSize=22,
            textColor=self.brand_color,
            spaceAfter=10,
            alignment=1,
        )
        heading_style = ParagraphStyle(
            "EstimateHeading",
            parent=styles["Heading2"],
            fontName=FONT_NAME,
            fontSize=13,
            textColor=self.dark_gray,
            spaceBefore=14,
            spaceAfter=6,
        )
        body_style = ParagraphStyle(
            "EstimateBody",
            parent=styles["Normal"],
            fontName=FONT_NAME,
            fontSize=10,
            textColor=self.dark_gray,
            spaceAfter=4,
        )

        story = [
            Paragraph("ESTIMATE", title_style),
            Paragraph(escape(self._company_line()), body_style),
            Spacer(1, 6 * mm),
            self._info_table(),
            Paragraph("BREAKDOWN", heading_style),
            self._breakdown_table(),
        ]

        season_details = self.breakdown.get("seasonDetails") or []
        if season_details:
            story.append(Paragraph("SEASON ADJUSTMENTS", heading_style))
            for detail in season_details:
                line = f"{detail.get('name', '')}: {format_price_jpy(detail.get('adjustment', 0))}"
                story.append(Paragraph(escape(line), body_style))

        story.append(Spacer(1, 10 * mm))
        story.append(
            Paragraph(
                "This estimate is valid for 30 days from the date of issue.",
                ParagraphStyle("Footer", parent=body_style, fontSize=8, textColor=colors.grey, alignment=1),
            )
        )

        doc.build(story)

        pdf_bytes = buffer.getvalue()
        buffer.close()

        logger.info(f"Generated estimate PDF ({len(pdf_bytes)} bytes)")
        return pdf_bytes

    def _company_line(self) -> str:
        parts = [self.company.get(key) for key in ("name", "postal", "address", "tel", "email")]
        return " / ".join(p for p in parts if p)

    def _info_table(self) -> Table:
        quote = self.quote
        issued = quote.estimated_at or datetime.utcnow()
        move_date = quote.preferred_date_1.isoformat() if quote.preferred_date_1 else "TBD"
        data = [
            ["Customer:", f"{quote.customer_last_name} {quote.customer_first_name}"],
            ["From:", f"{quote.from_prefecture}{quote.from_city}{quote.from_address_line}"],
            ["To:", f"{quote.to_prefecture}{quote.to_city}{quote.to_address_line}"],
            ["Move date:", move_date],
            ["Truck:", quote.estimate_truck_type or "-"],
            ["Issued:", issued.strftime("%Y-%m-%d")],
        ]

        table = Table(data, colWidths=[32 * mm, 140 * mm])
        table.setStyle(
            TableStyle(
                [
                    ("FONT", (0, 0), (-1, -1), FONT_NAME, 10),
                    ("TEXTCOLOR", (0, 0), (-1, -1), self.dark_gray),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
                ]
            )
        )
        return table

    def _breakdown_table(self) -> Table:
        data = [["Item", "Amount"]]
        for key, label in BREAKDOWN_ROWS:
            amount = self.breakdown.get(key, 0)
            # Zero surcharges are left off the quotation
            if amount or key == "basePrice":
                data.append([label, format_price_jpy(amount)])
        data.append(["Subtotal", format_price_jpy(self.breakdown.get("subtotal", 0))])
        data.append(["Tax", format_price_jpy(self.breakdown.get("tax", 0))])
        data.append(["Total (tax included)", format_price_jpy(self.breakdown.get("total", 0))])

        table = Table(data, colWidths=[110 * mm, 62 * mm], repeatRows=1)
        table.setStyle(
            TableStyle(
                [
                    # Header row
                    ("BACKGROUND", (0, 0), (-1, 0), self.brand_color),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                    ("FONT", (0, 0), (-1, -1), FONT_NAME, 10),
                    # Data rows
                    ("TEXTCOLOR", (0, 1), (-1, -1), self.dark_gray),
                    ("ALIGN", (1, 0), (1, -1), "RIGHT"),
                    ("ROWBACKGROUNDS", (0, 1), (-1, -2), [colors.white, self.light_gray]),
                    ("LINEABOVE", (0, -1), (-1, -1), 1, self.dark_gray),
                    ("FONT", (0, -1), (-1, -1), FONT_NAME, 12),
                    ("GRID", (0, 0), (-1, -2), 0.5, colors.grey),
                    ("TOPPADDING", (0, 0), (-1, -1), 5),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 5),
                ]
            )
        )
        return table


def generate_estimate_pdf(quote: QuoteRequest) -> bytes:
    return EstimatePDFGenerator(quote).generate()
