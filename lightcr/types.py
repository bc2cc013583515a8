import enum


class PatchType(enum.Enum):
    JSON = 'application/json-patch+json'
    MERGE = 'application/merge-patch+json'
    STRATEGIC = 'application/strategic-merge-patch+json'
    APPLY = 'application/apply-patch+yaml'

class CascadeType(enum.Enum):
    ORPHAN = 'Orphan'
    BACKGROUND = 'Background'
    FOREGROUND = 'Foreground'

class FieldValidation(enum.Enum):
    STRICT = 'Strict'   # fail the request on unknown or duplicate fields
    WARN = 'Warn'       # accept the request and return a warning header
    IGNORE = 'Ignore'   # drop unknown fields silently
