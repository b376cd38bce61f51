"""Instruction payloads sent to the image model."""


TRYON_PREAMBLE = "You are a specialized AI for virtual clothing try-ons. Follow the instructions precisely."


TRYON_PROMPT = """## Task: Virtual Clothing Try-On
Edit the person_photo by replacing the clothing worn by the main subject with the clothing item shown in the item_photo.

## Inputs:
- person_photo: the base image. The pose, face, hair and identity of the main subject MUST be preserved.
- item_photo: a reference for the clothing's appearance ONLY. Never use its background.

## Realism:
1. **Draping** - the fabric hangs naturally with the pose and gravity, with folds around joints and waist.
2. **Lighting** - highlights and shadows on the new clothing match the light in the person_photo.
3. **Fit** - the clothing wraps the body contours; it must never look like a flat sticker.

## Steps:
1. Find the main subject: the person most in focus, most centered or most prominent. If tied, the person on the left.
2. Replace the main subject's clothing with the item from item_photo, matching pose and proportions.
3. Reconstruct any body parts the original clothing hid (for example arms exposed by shorter sleeves).
4. Do not alter any other people in the photo.
5. {background_step}

## Output:
A single photorealistic image of the main subject wearing the new item. Output ONLY the image."""


PRESERVE_BACKGROUND_STEP = "CRITICAL: Preserve the entire background of the original person_photo."

REPLACE_BACKGROUND_STEP = (
    "CRITICAL: Replace the background of the person_photo with: '{background}'. "
    "It must be realistic and blend seamlessly with all subjects."
)


ENHANCE_PROMPT = """You are a professional photo editing AI. Enhance this image so it looks like a high-resolution DSLR photograph.

1. **Upscale and sharpen** fabric texture, facial detail and background without a digital over-sharpened look.
2. **Lighting** - brighten highlights and deepen shadows for depth.
3. **Color grading** - balance color, saturation and contrast like a fashion editorial.
4. **Artifacts** - remove noise and generation artifacts.
5. **CRITICAL** - do NOT change the person's identity, pose, body, clothing or background.

Output ONLY the final image."""


RECOLOR_PROMPT = """You are an expert fashion designer AI. Re-color the clothing item in the Base Item Image.

1. Produce the same clothing item recolored to: '{color}'.
2. **CRITICAL:** Present it on a plain, solid white background.
3. **CRITICAL:** No people, mannequins or hangers. Output ONLY the clothing item.
4. **CRITICAL:** Keep the original shape, texture and details. Only the color changes."""


BACKGROUND_EXPANSION_PROMPT = """You are an expert prompt engineer for a photorealistic image generator. Expand the user's short background idea into a rich, detailed description of a photograph.

Describe the lighting, the atmosphere and a few specific details, combined into one or two cohesive sentences.
Output ONLY the new prompt text, with no explanation.

Example input: "a beach"
Example output: "A serene tropical beach at sunset, with soft golden light casting long shadows from palm trees onto white sand and calm turquoise waves lapping the shore."

User input: "{idea}\""""


BACKGROUND_PRESETS = {
    "Default": "",
    "No BG": "a plain, solid white background",
    "Runway": "a professional fashion runway with dramatic lighting",
    "Beach": "a sunny tropical beach with turquoise water and white sand",
    "City": "a bustling, modern cityscape at dusk with neon lights",
}


def build_tryon_prompt(background: str = "") -> str:
    """Try-on instructions; an empty background keeps the original one."""
    background = background.strip()
    if background:
        step = REPLACE_BACKGROUND_STEP.format(background=background)
    else:
        step = PRESERVE_BACKGROUND_STEP
    return TRYON_PROMPT.format(background_step=step)


def build_recolor_prompt(color: str) -> str:
    return RECOLOR_PROMPT.format(color=color.strip())


def build_background_prompt(idea: str) -> str:
    return BACKGROUND_EXPANSION_PROMPT.format(idea=idea.strip())
