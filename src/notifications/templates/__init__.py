"""Template registry: maps a message kind to the template that renders it."""

from notifications.templates.new_order import NewOrderTemplate

NEW_ORDER = "New_Order"

TEMPLATE_REGISTRY: dict[str, type] = {
    NEW_ORDER: NewOrderTemplate,
}


def get_template(kind: str):
    template_cls = TEMPLATE_REGISTRY.get(kind)
    if template_cls is None:
        raise ValueError(f"No template registered for: {kind}")
    return template_cls
