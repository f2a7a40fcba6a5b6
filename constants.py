from config import settings

LIMIT_VALUE_AUTH = settings.limit_value_auth
SCOPE_AUTH = "auth"

LIMIT_VALUE_NOTES = settings.limit_value_notes
SCOPE_NOTES = "notes"

WELCOME_MESSAGE = "Welcome to the API"
INTERNAL_ERROR_MESSAGE = "Internal server error."
UNAUTHORIZED_MESSAGE = "Unauthorized."
