"""Default user-facing messages.

Every validator accepts a ``message`` argument that replaces its default. The
templates below are ``str.format`` strings; the placeholder names match the
validator attribute they report.
"""

REQUIRED = "This field is required."
INVALID_TYPE = "Please enter a valid {kind}."

MINIMUM_LENGTH = "Must be at least {characters} characters long."
MAXIMUM_LENGTH = "Must be at most {characters} characters long."
EXACT_LENGTH = "Must be exactly {characters} characters long."
EMAIL = "Please enter a valid email address."

MINIMUM_VALUE = "Must be at least {minimum}."
MAXIMUM_VALUE = "Must be at most {maximum}."
EXACT_VALUE = "Must be exactly {exact}."

CUSTOM = "This value is not valid."

# Human-readable names for the target kinds, used in INVALID_TYPE
KIND_NAMES = {
    "bool": "true or false value",
    "int": "whole number",
    "uint": "non-negative whole number",
    "double": "number",
    "string": "text value",
}
