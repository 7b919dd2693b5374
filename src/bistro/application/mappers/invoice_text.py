from __future__ import annotations

from bistro.application.dto.responses import InvoiceLineResponse, MoneyResponse


def render_invoice_lines(lines: list[InvoiceLineResponse]) -> list[str]:
    return [
        f"{line.position}. Dish with ingredients: {', '.join(line.ingredients)}"
        f" - Price: {line.price.display}"
        for line in lines
    ]


def render_invoice_text(
    customer_name: str,
    lines: list[InvoiceLineResponse],
    total: MoneyResponse,
    discounted_total: MoneyResponse | None = None,
) -> str:
    rows = [f"Invoice for {customer_name}:"]
    rows.extend(render_invoice_lines(lines))
    rows.append(f"Total: {total.display}")
    if discounted_total is not None:
        rows.append(f"Discounted total: {discounted_total.display}")
    return "\n".join(rows) + "\n"
