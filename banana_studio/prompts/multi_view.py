"""Промпт режима multi-view: три проекции, свободный ракурс или перспектива."""

from typing import Any

from banana_studio.prompts.options import format_number, number, pick

THREE_VIEW_PROMPT = (
    "Create a three-view technical drawing showing front view, side view, and top view "
    "arranged in a single image, with transparent background, clean line art, "
    "engineering drawing style"
)

PERSPECTIVE_PROMPTS: dict[str, str] = {
    "one-point": "Redraw with one-point perspective, depth enhancement",
    "two-point": "Redraw with two-point perspective, realistic spatial view",
    "three-point": "Redraw with three-point perspective, dramatic effect",
}

HORIZONTAL_VIEWS: dict[float, str] = {
    0: "front view",
    22.5: "slight front-right turn view",
    45: "front-right view",
    67.5: "steep front-right turn view",
    90: "right side view",
    112.5: "steep rear-right turn view",
    135: "rear-right view",
    157.5: "slight rear-right turn view",
    180: "back view",
    202.5: "slight rear-left turn view",
    225: "rear-left view",
    247.5: "steep rear-left turn view",
    270: "left side view",
    292.5: "steep front-left turn view",
    315: "front-left view",
    337.5: "slight front-left turn view",
}

VERTICAL_VIEWS: dict[float, str] = {
    -90: "straight top-down view",
    -75: "extreme high-angle view",
    -60: "high-angle view",
    -45: "pronounced high-angle view",
    -30: "moderate high-angle view",
    -15: "slight high-angle view",
    0: "eye-level view",
    15: "slight low-angle view",
    30: "moderate low-angle view",
    45: "pronounced low-angle view",
    60: "low-angle view",
    75: "extreme low-angle view",
    90: "straight bottom-up view",
}

DEFAULT_ANGLE = 45.0
DEFAULT_ELEVATION = 0.0

FREE_VIEW_TEMPLATE = """As a professional 3D rendering expert, generate a view of the product from the specified perspective.

**Perspective Configuration:**
- Horizontal Angle: {angle}° ({horizontal})
- Vertical Angle: {elevation}° ({vertical})

**Technical Rendering Requirements:**

1. **Geometric Perspective Accuracy**
   - Apply standard three-point perspective projection principles
   - Ensure horizontal and vertical vanishing points are accurate
   - Maintain realistic object proportion relationships

2. **Spatial Reconstruction Quality**
   - Reasonably infer geometric structure of occluded areas based on original perspective
   - Maintain 3D spatial relationships in the original scene
   - Preserve relative positions and proportions between objects

3. **Material and Texture Consistency**
   - Completely retain material properties from the original image
   - Maintain texture details and surface characteristics
   - Preserve color saturation and light-dark relationships

4. **Lighting Physical Accuracy**
   - Adjust light source direction and intensity according to new perspective
   - Calculate accurate ambient lighting and reflections
   - Create natural shadow casting and receiving

5. **Visual Coherence**
   - Maintain artistic style and capture quality of the original image
   - Ensure detail sharpness and noise levels remain consistent
   - Achieve smooth depth of field transition effects

**Output Requirements:**
- Format: High-quality PNG image
- Resolution: Maintain original image resolution
- Style: Completely follow visual characteristics of the original image
- Background: Naturally extend scene boundaries according to new perspective

**Quality Control Standards:**
- Zero image deformation or stretching
- Accurate lighting and shadow physical effects
- Reasonable occlusion relationships
- Photorealistic rendering quality

**Perspective Transformation Task:**
Transform the original product image to be viewed from {horizontal} with {vertical}. Maintain complete material and texture fidelity while applying accurate geometric perspective transformations."""


def closest_view(views: dict[float, str], target: float) -> str:
    """Название ближайшего ракурса.

    Расстояние считается без перехода через 360°: 350° ближе к 337.5°, чем к 0°.
    При равенстве побеждает меньший угол.
    """
    best = min(views, key=lambda angle: (abs(angle - target), angle))
    return views[best]


def build_free_view_prompt(settings: dict[str, Any]) -> str:
    angle = number(settings, "angle", DEFAULT_ANGLE)
    elevation = number(settings, "elevation", DEFAULT_ELEVATION)
    horizontal = closest_view(HORIZONTAL_VIEWS, angle)
    vertical = closest_view(VERTICAL_VIEWS, elevation)

    return FREE_VIEW_TEMPLATE.format(
        angle=format_number(angle),
        elevation=format_number(elevation),
        horizontal=horizontal,
        vertical=vertical,
    )


def build_multi_view_prompt(settings: dict[str, Any]) -> str:
    """Промпт по ``viewType``; неизвестный тип даёт пустую строку."""
    view_type = settings.get("viewType") or "free-view"

    if view_type == "three-view":
        return THREE_VIEW_PROMPT
    if view_type == "free-view":
        return build_free_view_prompt(settings)
    if view_type == "perspective":
        perspective = pick(settings, "perspectiveType", PERSPECTIVE_PROMPTS, "one-point")
        return PERSPECTIVE_PROMPTS[perspective]
    return ""
