"""Email templates, rendered from the data passed to ``EmailPort.send``."""

ORDER_CONFIRMATION = "order-confirmation"
NEW_QUERY = "query-mail"


def _order_confirmation(data: dict) -> str:
    lines = "\n".join(
        f"  - {line['product_name']} x{line['quantity']} ({line['status']})" for line in data.get("lines", [])
    )
    return (
        f"Hi {data.get('name', 'there')},\n\n"
        f"{data.get('changed_count', 0)} item(s) in your order are now {data.get('status')}:\n"
        f"{lines}\n\n"
        "Thank you for shopping with us!"
    )


def _new_query(data: dict) -> str:
    return (
        f"New query from {data.get('name')} <{data.get('email')}>\n"
        f"Phone: {data.get('phone')}\n\n"
        f"{data.get('message', '')}"
    )


_RENDERERS = {
    ORDER_CONFIRMATION: _order_confirmation,
    NEW_QUERY: _new_query,
}


def render(template: str, data: dict) -> str:
    renderer = _RENDERERS.get(template)
    if renderer is None:
        raise ValueError(f"No template registered under: {template}")
    return renderer(data)
