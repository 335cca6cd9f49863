# ===========================================
# COMMON COMPONENTS
# ===========================================

# Appended to every style prompt so results stay photographic and keep the
# subject recognisable.
IDENTITY_PRESERVATION_SUFFIX = (
    "Ultra realistic, 4K, highly detailed, sharp focus, cinematic lighting, "
    "professional DSLR quality. Maintain the exact face identity, facial structure, "
    "and natural skin tone from the reference image. Do not change the person's identity."
)


def _style_prompt(look: str) -> str:
    return f"{look} {IDENTITY_PRESERVATION_SUFFIX}"


# ===========================================
# STYLE CATALOG
# ===========================================
# Order matters: the batch scheduler dispatches styles in this order.

STYLE_DEFINITIONS = [
    {
        "id": "cinematic-hero",
        "name": "Cinematic Hero",
        "description": "Dark moody background, dramatic lighting, high contrast.",
        "prompt": _style_prompt(
            "Cinematic Hero Look – dark moody background, dramatic lighting, "
            "high contrast, intense expression."
        ),
    },
    {
        "id": "royal-king",
        "name": "Royal King",
        "description": "Elegant outfit, golden light, luxury background.",
        "prompt": _style_prompt(
            "Royal King Style – elegant royal outfit style, golden light, "
            "soft depth of field, luxury palace background."
        ),
    },
    {
        "id": "bike-rider",
        "name": "Bike Rider",
        "description": "Night city, neon lights, cinematic grading.",
        "prompt": _style_prompt(
            "Bike Rider Attitude – night city background, neon lights, "
            "cinematic color grading, wearing a leather jacket."
        ),
    },
    {
        "id": "fitness-model",
        "name": "Fitness Model",
        "description": "Gym lighting, strong definition, sports vibe.",
        "prompt": _style_prompt(
            "Fitness Model Style – gym lighting, strong body definition, "
            "sports photoshoot vibe, athletic wear."
        ),
    },
    {
        "id": "rain-effect",
        "name": "Rain Effect",
        "description": "Realistic rain, wet hair, blue cinematic tone.",
        "prompt": _style_prompt(
            "Rain Effect Portrait – realistic rain overlay, wet hair look, "
            "blue cinematic tone, moody atmosphere."
        ),
    },
    {
        "id": "mafia-boss",
        "name": "Mafia Boss",
        "description": "Black suit, dark background, serious expression.",
        "prompt": _style_prompt(
            "Mafia Boss Style – black suit look, dark background, "
            "serious expression, movie poster vibe."
        ),
    },
    {
        "id": "gamer-setup",
        "name": "Gamer Setup",
        "description": "RGB lighting, blue and purple glow.",
        "prompt": _style_prompt(
            "Gamer Setup Look – RGB lighting room, blue and purple glow, "
            "screen light reflecting on face."
        ),
    },
    {
        "id": "travel-influencer",
        "name": "Travel Influencer",
        "description": "Mountain background, warm natural sunlight.",
        "prompt": _style_prompt(
            "Travel Influencer Style – mountain or outdoor scenic background, "
            "warm natural sunlight, adventurous vibe."
        ),
    },
    {
        "id": "street-fashion",
        "name": "Street Fashion",
        "description": "Urban street, graffiti wall, trendy look.",
        "prompt": _style_prompt(
            "Street Fashion Model – urban street, graffiti wall, "
            "trendy fashion look, streetwear."
        ),
    },
    {
        "id": "studio-portrait",
        "name": "Studio Portrait",
        "description": "Soft studio lighting, clean background.",
        "prompt": _style_prompt(
            "Clean Studio Portrait – soft studio lighting, clean background, "
            "professional headshot."
        ),
    },
]

STYLE_IDS = frozenset(style["id"] for style in STYLE_DEFINITIONS)
