from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"

env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(["html"])
)


def render_template(template_path: str, **context) -> str:
    template = env.get_template(template_path)
    return template.render(**context)


def short_order_ref(order_id) -> str:
    """Order number as shown to people, e.g. ``#000042``."""
    return f"#{int(order_id):06d}"


env.filters["order_ref"] = short_order_ref
