"""Промпт режима wireframe (извлечение каркасного рисунка).

Настройки: ``type`` (engineering/conceptual), ``detail`` (low/medium/high),
``style`` (minimal/technical/artistic).
"""

from typing import Any

from banana_studio.prompts.options import pick

TYPE_DESCRIPTIONS: dict[str, str] = {
    "engineering": (
        "Technical engineering wireframe showing structural framework, mechanical "
        "components, and assembly relationships. Include construction lines, hidden "
        "edges, and technical annotations if needed."
    ),
    "conceptual": (
        "Conceptual wireframe focusing on overall form, silhouette, and design intent. "
        "Emphasize creative flow and aesthetic proportions over technical details."
    ),
}

DETAIL_DESCRIPTIONS: dict[str, str] = {
    "low": (
        "Minimal wireframe showing only primary contours and major structural lines. "
        "Use sparse linework to capture essential shape only."
    ),
    "medium": (
        "Balanced wireframe including primary contours, secondary features, and "
        "important internal structures. Show key design elements without overcrowding."
    ),
    "high": (
        "Comprehensive wireframe with full structural details, complex geometries, "
        "surface textures, and intricate components. Include fine details and complex "
        "linework."
    ),
}

STYLE_DESCRIPTIONS: dict[str, str] = {
    "minimal": (
        "Minimalist aesthetic using uniform thin lines, negative space, and clean "
        "geometry. Focus on simplicity and elegance with reduced visual noise."
    ),
    "technical": (
        "Technical drawing style with varied line weights, cross-sections, and "
        "engineering annotations. Include construction guidelines and technical precision."
    ),
    "artistic": (
        "Artistic interpretation with expressive lines, dynamic strokes, and creative "
        "composition. May include subtle shading or stylized elements for visual appeal."
    ),
}

BASE_TEMPLATE = """Create a wireframe illustration based on the uploaded product image.

Wireframe type: {wireframe_type}
Detail level: {detail}
Style: {style}

Requirements:
- Analyze the product's form, structure, and key features
- Generate clean wireframe lines that capture the essential geometry
- Maintain accurate proportions and perspective from the original product
- Output should be vector-style or clean line art on transparent/white background"""

PROCESSING_GUIDELINES = """Processing guidelines:
- For engineering type: Emphasize structural integrity and technical components
- For conceptual type: Highlight design flow and aesthetic proportions
- Adjust line density and complexity according to detail level
- Apply the selected visual style while maintaining clarity
- Ensure the wireframe accurately represents the original product form
- Output clean, professional results suitable for design documentation"""


def build_wireframe_prompt(settings: dict[str, Any]) -> str:
    wireframe_type = pick(settings, "type", TYPE_DESCRIPTIONS, "engineering")
    detail = pick(settings, "detail", DETAIL_DESCRIPTIONS, "medium")
    style = pick(settings, "style", STYLE_DESCRIPTIONS, "technical")

    base = BASE_TEMPLATE.format(wireframe_type=wireframe_type, detail=detail, style=style)

    return (
        f"{base}\n\n"
        f"Type specifications:\n{TYPE_DESCRIPTIONS[wireframe_type]}\n\n"
        f"Detail specifications:\n{DETAIL_DESCRIPTIONS[detail]}\n\n"
        f"Style specifications:\n{STYLE_DESCRIPTIONS[style]}\n\n"
        f"{PROCESSING_GUIDELINES}"
    )
