from typing import Dict, List

from .errors import UnknownTemplateError

# ----------------------------
# Invoice templates (order is the selector order)
# ----------------------------
TEMPLATES: List[dict] = [
    {"id": "classic", "name": "Classic", "description": "Traditional invoice layout with clean lines"},
    {"id": "modern", "name": "Modern", "description": "Contemporary design with subtle colors"},
    {"id": "minimal", "name": "Minimal", "description": "Clean and simple with minimal styling"},
    {"id": "professional", "name": "Professional", "description": "Business-focused with detailed sections"},
    {"id": "elegant", "name": "Elegant", "description": "Sophisticated design with refined typography"},
    {"id": "corporate", "name": "Corporate", "description": "Formal layout for enterprise use"},
    {"id": "simple", "name": "Simple", "description": "Basic layout focusing on essentials"},
    {"id": "bold", "name": "Bold", "description": "Strong visual hierarchy with bold headers"},
    {"id": "compact", "name": "Compact", "description": "Space-efficient layout for many items"},
    {"id": "premium", "name": "Premium", "description": "High-end design with premium feel"},
]

TEMPLATE_BY_ID: Dict[str, dict] = {t["id"]: t for t in TEMPLATES}

TEMPLATE_IDS = tuple(t["id"] for t in TEMPLATES)

DEFAULT_TEMPLATE = "classic"


def list_templates() -> List[dict]:
    return [dict(t) for t in TEMPLATES]


def get_template(template_id: str) -> dict:
    try:
        return TEMPLATE_BY_ID[template_id]
    except (KeyError, TypeError):
        raise UnknownTemplateError(template_id) from None
