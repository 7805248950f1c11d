"""Format Receipt data for output."""

import json

from myprice.domain.receipt import Receipt


def format_receipt_json(receipt: Receipt, indent: int | None = 2) -> str:
    """Serialize a receipt as a JSON document."""
    return json.dumps(receipt.to_dict(), indent=indent, ensure_ascii=False)


def _format_amount(label: str, amount: object, width: int) -> str:
    return f"  {label.ljust(width)}  {amount:>10}"


def format_receipt_summary(receipt: Receipt) -> str:
    """
    Format a receipt as an aligned, human-readable block.

    Example:
        Vendor:   STORE NAME
        Date:     03/15/2024
        Items:
          Milk                 1 x       4.99
        Totals:
          Subtotal        4.99
          ...
    """
    lines = [
        f"Vendor:   {receipt.vendor or '(unknown)'}",
        f"Date:     {receipt.date or '(unknown)'}",
    ]

    lines.append("Items:")
    if receipt.items:
        name_width = max(len(item.name) for item in receipt.items)
        for item in receipt.items:
            lines.append(f"  {item.name.ljust(name_width)}  {item.qty:>3} x {item.price:>10}")
    else:
        lines.append("  (none)")

    lines.append("Totals:")
    label_width = len("Subtotal")
    lines.append(_format_amount("Subtotal", receipt.subtotal, label_width))
    lines.append(_format_amount("Tax", receipt.tax, label_width))
    lines.append(_format_amount("Total", receipt.total, label_width))

    if receipt.anomalies:
        lines.append("Anomalies:")
        lines.extend(f"  ! {anomaly}" for anomaly in receipt.anomalies)

    lines.append(f"Notes:    {receipt.confidence_notes}")
    return "\n".join(lines)
