"""Bot copy rendered by the state machine."""

WELCOME = (
    "Welcome to the Sports Visuals Generator – your AI-powered assistant for creating "
    "stunning sports-themed images."
)
WELCOME_FOLLOWUP = "This chatbot can generate images for any sport. What would you like to create?"

CHOOSE_STYLE = "Now, choose an art style for your image."
PERSONA_FAILED = "Sorry, I had an issue processing your request. Please try again."

BATCH_READY = (
    "Here are a few options. Click the wand to request changes to a specific image, "
    "or describe a new idea below."
)
BATCH_EMPTY = "Sorry, I couldn't generate any images. Please try a different description."
BATCH_FAILED = "An error occurred while generating the images. Please try again."

ASK_FEEDBACK = "Of course. What would you like to change or add to this image?"
NO_BASE_IMAGE = "My apologies, I can't find the last image to modify. Please describe a new image."
VARIATION_READY = "How does this look? Are you satisfied, or would you like to make more changes?"
VARIATION_EMPTY = (
    "Sorry, I couldn't generate a variation based on that feedback. "
    "Please try describing the change differently."
)
VARIATION_FAILED = "An error occurred while generating the image variation. Please try again."
ASK_SATISFACTION_PREVIOUS = "Are you satisfied with the previous image, or would you like to try again?"

SATISFIED = "Great! Your sports image has been generated successfully."
WHAT_NEXT = "What would you like to create next?"
RETRY = "No problem. Please describe the new sports image you have in mind."
