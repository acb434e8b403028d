"""Question-resolution constants shared across the SDK.

These values are referenced by the intake normalizer, the identifier
resolver, the numbering engine, and the assignment service.  They mirror
conventions used by the forms editor that submits question drafts.

Several constants can be overridden via environment variables so that
deployments can adjust identifier conventions without code changes.
"""

import os

# Prefixes marking a client-side placeholder id ("new, unsaved").
# Overridable via TEMP_ID_PREFIXES (comma-separated).
TEMP_ID_PREFIXES: tuple[str, ...] = tuple(
    p.strip()
    for p in os.getenv("TEMP_ID_PREFIXES", "#,new-,temp_frontend_id_,csv_question_").split(",")
    if p.strip()
)

# Synthesized originating id for drafts submitted without any identifier.
PLACEHOLDER_ID_PREFIX = "temp_frontend_id_"

# Parent number used when a conditional question's parent is not yet numbered.
ORPHAN_PARENT_NUMBER = "0"

# Sub-index 1..26 maps onto these letters; larger indices use the bare numeral.
SUB_INDEX_LETTERS = "abcdefghijklmnopqrstuvwxyz"

# Delimiter for options / routing fields submitted as a single string.
LIST_DELIMITER = ";"

# Question defaults applied when the draft leaves them empty.
DEFAULT_PAGE_NUMBER = 1
DEFAULT_COMPONENT = "text"
DEFAULT_LABEL = "Untitled Question"
DEFAULT_CRITICALITY = "low"

# Component roles projected into top-level assignment attributes.
ROLE_SCHOOL_SELECTOR = "schoolSelector"
ROLE_COMPLETION_DATE = "completionDate"
ROLE_COMPLETION_TIME = "completionTime"

# Assignment defaults.  The created/due date is rendered in this time zone.
# Overridable via ASSIGNMENT_TIMEZONE env var.
ASSIGNMENT_TIMEZONE = os.getenv("ASSIGNMENT_TIMEZONE", "America/New_York")
DEFAULT_ASSESSMENT_NAME = "Untitled Assignment"
DEFAULT_FREQUENCY = "onetime"
DEFAULT_ASSIGNMENT_TYPE = "assignment"
DEFAULT_STATUS = "Pending"
