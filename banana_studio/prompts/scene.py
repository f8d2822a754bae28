"""Промпт режима scene: встраивание товара в сцену.

Два источника сцены:
    upload — загруженное изображение сцены, текст выбирается по
        интенсивности слияния ``blendIntensity`` (0-100);
    prompt — готовый пресет ``scenePrompt`` или произвольный текст.
"""

from typing import Any

from banana_studio.prompts.options import format_number, number

DEFAULT_BLEND_INTENSITY = 50.0

SCENE_PRESETS: dict[str, str] = {
    "modern-office": (
        "Place in modern office with tech lighting, professional workspace with clean "
        "lines and contemporary furniture"
    ),
    "industrial": (
        "Place in industrial scene with metal textures, factory environment with steel "
        "structures and mechanical elements"
    ),
    "e-commerce": (
        "Create an e-commerce product showcase with professional lighting, clean white "
        "background, premium presentation, studio photography style"
    ),
    "nature": (
        "Place in natural outdoor environment, surrounded by natural elements and "
        "organic lighting"
    ),
    "night-city": (
        "Place in nighttime city with neon lights, urban atmosphere with cityscape and "
        "electric ambiance"
    ),
    "minimalist": (
        "Place in minimalist clean environment, simple and elegant setting with neutral tones"
    ),
    "outdoor-sports": (
        "Place in outdoor sports environment, active lifestyle setting with natural "
        "lighting and sporty atmosphere"
    ),
    "family-gathering": (
        "Place in family gathering scene, warm home environment with cozy atmosphere "
        "and social interaction"
    ),
}

INTRO = (
    "Image composition task: Integrate the product image into the provided scene image "
    "with {blend}% fusion intensity.\n\n"
    "Fusion intensity guidelines:\n"
    "- {blend}%: {guideline}"
)

TECHNICAL_REQUIREMENTS = """Technical requirements:
1. Maintain product recognizability at all intensity levels
2. Adjust lighting, shadows, and color tones to match the scene environment
3. Ensure realistic perspective and proportions relative to the scene
4. Create natural transitions between product edges and scene background
5. Preserve key product features while adapting to environmental context"""

WORKFLOW = """Workflow:
1. Analyze the scene image's lighting conditions, color temperature, and perspective
2. Examine the product image for key features and structural elements
3. Apply fusion at {blend}% level according to the intensity guidelines
4. Ensure realistic shadow casting based on scene light sources
5. Adjust product saturation and contrast to match scene characteristics"""

FINAL_WORKFLOW_STEP = (
    "\n6. Final output should show natural integration while maintaining specified "
    "fusion strength"
)

GENTLE_PLACEMENT = (
    "Gently place the product into the scene with minimal environmental impact. "
    "Maintain {share} of original product appearance. Only make subtle adjustments to "
    "lighting and shadows to match the scene's direction. Keep product fully "
    "recognizable with sharp edges."
)

BALANCED_BLEND = (
    "Blend the product into the scene while maintaining its core identity. Adjust "
    "colors and lighting to harmonize with the environment. Add realistic shadows and "
    "slight environmental reflections. Product should feel part of the scene while "
    "remaining clearly distinguishable."
)

DEEP_INTEGRATION = (
    "Integrate the product deeply into the scene environment. Adapt product colors and "
    "textures to match surroundings while keeping essential features visible. Create "
    "strong environmental lighting effects and contextual shadows. Make the product "
    "appear naturally situated in the scene."
)

SEAMLESS_MERGE = (
    "Seamlessly merge the product with the scene background. Use the scene's lighting, "
    "color palette, and atmospheric conditions to transform the product's appearance. "
    "Maintain only the essential silhouette and key features. Achieve photorealistic "
    "integration where the product appears native to the environment."
)

IDENTITY_NOTE = (
    "Important: The product must remain identifiable at every fusion level, only the "
    "degree of environmental adaptation should change."
)


def build_blend_prompt(blend_intensity: float) -> str:
    """Текст для загруженной сцены по интенсивности слияния.

    Полосы: 0, до 25, до 50, до 75, до 90, выше 90.
    """
    blend = format_number(blend_intensity)
    workflow = WORKFLOW.format(blend=blend)

    if blend_intensity == 0:
        guideline = "Preserve the original product image with minimal scene changes"
        sections = [TECHNICAL_REQUIREMENTS, GENTLE_PLACEMENT.format(share="95%")]
    elif blend_intensity <= 25:
        guideline = "Subtle integration with gentle environmental adjustments"
        sections = [TECHNICAL_REQUIREMENTS, GENTLE_PLACEMENT.format(share="90-95%")]
    elif blend_intensity <= 50:
        guideline = (
            "Balanced fusion maintaining product identity while blending with surroundings"
        )
        sections = [TECHNICAL_REQUIREMENTS, workflow, BALANCED_BLEND]
    elif blend_intensity <= 75:
        guideline = (
            "Strong integration where product adapts to scene but remains clearly visible"
        )
        sections = [TECHNICAL_REQUIREMENTS, workflow, DEEP_INTEGRATION]
    elif blend_intensity <= 90:
        guideline = "Scene-dominant integration with natural product placement"
        sections = [TECHNICAL_REQUIREMENTS, workflow, SEAMLESS_MERGE]
    else:
        guideline = "Precise scene background usage with exact product positioning"
        sections = [
            TECHNICAL_REQUIREMENTS,
            workflow + FINAL_WORKFLOW_STEP,
            SEAMLESS_MERGE,
            IDENTITY_NOTE,
        ]

    intro = INTRO.format(blend=blend, guideline=guideline)
    return "\n\n".join([intro, *sections])


def build_scene_prompt(settings: dict[str, Any], has_scene_image: bool = False) -> str:
    """Промпт режима scene; без подходящего источника — пустая строка."""
    source = settings.get("source")

    if source == "upload" and has_scene_image:
        return build_blend_prompt(
            number(settings, "blendIntensity", DEFAULT_BLEND_INTENSITY)
        )

    scene_prompt = settings.get("scenePrompt")
    if source == "prompt" and scene_prompt:
        return SCENE_PRESETS.get(scene_prompt, str(scene_prompt))

    return ""
