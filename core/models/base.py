# =============================================================================
# core/models/base.py - Shared Schema Configuration
# =============================================================================
# Conduit clients speak camelCase JSON (tagList, favoritesCount, createdAt)
# while Python code uses snake_case. Every schema inherits ConduitModel so
# the mapping happens in one place:
#   - incoming JSON may use either spelling
#   - outgoing JSON uses the camelCase alias (FastAPI serializes by alias)
# =============================================================================

from typing import Annotated

from pydantic import BaseModel, ConfigDict, StringConstraints
from pydantic.alias_generators import to_camel


class ConduitModel(BaseModel):
    """Base for every request/response schema."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


# A required text field: surrounding whitespace is trimmed, and the
# trimmed value must not be empty
RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

# Same, capped to the width of the indexed VARCHAR(255) columns
ShortText = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)
]

# A tag name: trimmed and capped to tags.name; blank names are dropped later
TagName = Annotated[str, StringConstraints(strip_whitespace=True, max_length=255)]
