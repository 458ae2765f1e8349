"""
Plain-text receipt for a closed session, for thermal printers
"""

from decimal import Decimal

from barpos.services.invoices import Invoice


def _money(amount: Decimal, currency: str) -> str:
    return f"{currency}{amount:.2f}"


def _row(left: str, right: str, width: int) -> str:
    space = max(width - len(left) - len(right), 1)
    return f"{left}{' ' * space}{right}"


def format_invoice_text(invoice: Invoice, width: int = 40, currency: str = "$") -> str:
    """Format an invoice as fixed-width text"""
    lines = []
    lines.append("=" * width)
    lines.append(f"Table {invoice.table_number}".center(width).rstrip())
    lines.append(f"Opened: {invoice.start_time.strftime('%Y-%m-%d %H:%M')}")
    if invoice.end_time:
        lines.append(f"Closed: {invoice.end_time.strftime('%Y-%m-%d %H:%M')}")
    lines.append("=" * width)

    if not invoice.lines:
        lines.append("No items")
    for line in invoice.lines:
        lines.append(_row(f"{line.quantity} x {line.product_name}", _money(line.line_total, currency), width))
        if line.quantity > 1:
            lines.append(f"  {_money(line.price_at_order, currency)} each")

    lines.append("-" * width)
    lines.append(_row("TOTAL", _money(invoice.total_amount, currency), width))
    lines.append("=" * width)
    lines.append("Thank you!")

    return "\n".join(lines)
