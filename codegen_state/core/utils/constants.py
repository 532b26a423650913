"""Constants used throughout the application."""

# Conversation consolidation
MIN_MESSAGES_FOR_CLEANUP = 25
FINGERPRINT_CHARS = 100
CONVERSATION_ID_PREFIX = "conv-"
INTERNAL_MEMO_MARKERS = ("**<Internal Memo>**", "Project Updates:")

# Naming backfill
PROJECT_NAME_MAX_LENGTH = 20
DEFAULT_PROJECT_SEED = "project"
NANO_ID_SIZE = 10
NANO_ID_ALPHABET = "_-0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"

# Persisted state keys
FILES_KEY = "generatedFilesMap"
MESSAGES_KEY = "conversationMessages"
INFERENCE_CONTEXT_KEY = "inferenceContext"
USER_API_KEYS_KEY = "userApiKeys"
SCREENSHOT_KEY = "latestScreenshot"
TEMPLATE_DETAILS_KEY = "templateDetails"
UPDATES_ACCUMULATOR_KEY = "projectUpdatesAccumulator"
TEMPLATE_NAME_KEY = "templateName"
PROJECT_NAME_KEY = "projectName"
QUERY_KEY = "query"
BLUEPRINT_KEY = "blueprint"

DEPRECATED_STATE_KEYS = (SCREENSHOT_KEY, TEMPLATE_DETAILS_KEY)
