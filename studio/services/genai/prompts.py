"""Fixed instructions sent alongside the image for each analysis."""

DESCRIBE_PROMPT = "Describe this image in detail."

STORY_PROMPT = "Write a short, imaginative story based on this image."

SUGGEST_PROMPT = (
    "Suggest {count} creative and detailed edits for this photo. Examples: change background, "
    "add elements, or apply a specific artistic style. Provide the suggestions as a JSON array "
    "of objects, each with a 'title' and 'description' key. The description must be usable on "
    "its own as an instruction for an image-editing model. Return only the JSON array."
)
