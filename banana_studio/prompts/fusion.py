"""Промпт режима fusion: слияние товара с референсом по пяти осям."""

from typing import Any

from banana_studio.prompts.options import pick

COLOR_MATERIAL: dict[str, str] = {
    "none": "Maintain original color and material without changes",
    "slight": "Adopt reference image main colors or subtle texture patterns",
    "medium": "Balance fusion of colors and material characteristics from both",
    "strong": "Primarily adopt reference image color scheme and material texture",
    "complete": "Completely adopt reference image color and material system",
}

FORM_STRUCTURE: dict[str, str] = {
    "none": "Maintain original form and structure without changes",
    "contour": "Only adopt reference image overall contour and shape",
    "proportion": "Fusion of reference image size ratios and golden section",
    "structure": "Deep integration of structural elements and component layout",
    "complete": "Basic adoption of reference image form and structural framework",
}

DESIGN_STYLE: dict[str, str] = {
    "minimal": "Clean lines, reduced decoration, functionality first",
    "vintage": "Classic elements, nostalgic texture, traditional craftsmanship feel",
    "tech": "Futuristic feel, luminous elements, high-tech materials",
    "organic": "Streamlined, natural forms, biomimetic design",
    "luxury": "Fine details, noble materials, decorative elements",
    "industrial": "Exposed structure, functionalism, mechanical aesthetics",
}

DETAIL_LEVEL: dict[str, str] = {
    "concept": "Only represent core concepts and overall form",
    "simplified": "Retain key features, remove complex details",
    "standard": "Balanced detail representation, suitable for general display",
    "refined": "Rich surface details and material representation",
    "extreme": "Photo-realistic quality, including all micro-details",
}

FUNCTIONAL_FUSION: dict[str, str] = {
    "none": "Only visual fusion, no functional concept involvement",
    "hint": "Suggest reference image functional features through design elements",
    "metaphor": "Transform reference image functional concepts into design metaphors",
    "integration": "Attempt to integrate functional characteristics of both in design",
    "reconstruction": "Reimagine product purpose based on functional features of both",
}

# Строки подробных указаний; для "none" указаний нет
COLOR_MATERIAL_GUIDANCE: dict[str, str] = {
    "slight": "Extract 1-2 main colors from reference image, lightly adjust product surface texture",
    "medium": "Balance fusion of both color systems and material characteristics, create a new color scheme",
    "strong": "Primarily adopt reference image color system, deeply simulate material texture and surface treatment",
    "complete": "Completely adopt reference image color language and material system",
}

FORM_STRUCTURE_GUIDANCE: dict[str, str] = {
    "contour": "Adopt reference image overall contour, maintain product basic functional layout",
    "proportion": "Fusion of reference image golden ratio and size relationships, optimize product ergonomics",
    "structure": "Deep integration of both structural frameworks, redesign component layout and connection methods",
    "complete": "Basic adoption of reference image form language, innovation in functional implementation",
}

DESIGN_STYLE_GUIDANCE: dict[str, str] = {
    "minimal": "Adopt minimalist aesthetics, remove excessive decoration, focus on functionality and line beauty",
    "vintage": "Incorporate vintage elements, embody nostalgic sentiment and traditional craftsmanship aesthetics",
    "tech": "Futuristic tech feel, use luminous elements and modern high-tech materials",
    "organic": "Organic forms, simulate natural streamlined and biomimetic elements",
    "luxury": "Luxury and refinement, focus on detailed craftsmanship and noble material application",
    "industrial": "Industrial aesthetics, showcase mechanical beauty and functionality-first design philosophy",
}

FUNCTIONAL_GUIDANCE: dict[str, str] = {
    "hint": "Cleverly suggest reference image functional features through design elements, enhance product storytelling",
    "metaphor": "Transform reference image functional concepts into design metaphors, create meaningful formal language",
    "integration": "Deep integration of both functional features, create innovative products with dual attributes",
    "reconstruction": "Redefine product purpose based on both functional features, break traditional product boundaries",
}

BASE_TEMPLATE = """Perform AI fusion design based on product original image and reference image to create a new product design that combines characteristics of both.

Fusion parameter configuration:
- Color and Material Fusion: {color_material}
- Form and Structure Fusion: {form_structure}
- Design Style: {design_style}
- Detail Level: {detail_level}
- Functional Concept Fusion: {functional}

Technical Requirements:
1. Maintain product basic functionality and recognizability
2. Fusion should be natural and reasonable, avoid abrupt design changes
3. Focus on overall coordination of materials, proportions, and details
4. Reflect core design elements and concepts from reference image
5. Ensure final product has modern aesthetics and practicality"""

OUTPUT_REQUIREMENTS = (
    "Output Requirements: Professional product rendering, 4K resolution, pure white "
    "background, ensure natural and innovative fusion effects."
)


def build_fusion_guidance(
    color_material: str, form_structure: str, design_style: str, functional: str
) -> str:
    """Подробные указания, по строке на каждую ось с непустым значением."""
    lines = []
    if color_material in COLOR_MATERIAL_GUIDANCE:
        lines.append(f"- Color and Material: {COLOR_MATERIAL_GUIDANCE[color_material]}\n")
    if form_structure in FORM_STRUCTURE_GUIDANCE:
        lines.append(f"- Form and Structure: {FORM_STRUCTURE_GUIDANCE[form_structure]}\n")
    if design_style in DESIGN_STYLE_GUIDANCE:
        lines.append(f"- Design Style: {DESIGN_STYLE_GUIDANCE[design_style]}\n")
    if functional in FUNCTIONAL_GUIDANCE:
        lines.append(f"- Functional Concept: {FUNCTIONAL_GUIDANCE[functional]}\n")
    return "".join(lines)


def build_fusion_prompt(settings: dict[str, Any]) -> str:
    color_material = pick(settings, "colorMaterialFusion", COLOR_MATERIAL, "medium")
    form_structure = pick(settings, "formStructureFusion", FORM_STRUCTURE, "proportion")
    design_style = pick(settings, "designStyle", DESIGN_STYLE, "tech")
    detail_level = pick(settings, "detailLevel", DETAIL_LEVEL, "standard")
    functional = pick(settings, "functionalFusion", FUNCTIONAL_FUSION, "metaphor")
    custom_description = settings.get("customDescription") or ""

    base = BASE_TEMPLATE.format(
        color_material=COLOR_MATERIAL[color_material],
        form_structure=FORM_STRUCTURE[form_structure],
        design_style=DESIGN_STYLE[design_style],
        detail_level=DETAIL_LEVEL[detail_level],
        functional=FUNCTIONAL_FUSION[functional],
    )
    guidance = build_fusion_guidance(color_material, form_structure, design_style, functional)
    custom = f"Custom Requirements: {custom_description}" if custom_description else ""

    return (
        f"{base}\n\n"
        f"Detailed Fusion Guidance:\n{guidance}\n\n"
        f"{custom}\n\n"
        f"{OUTPUT_REQUIREMENTS}"
    )
