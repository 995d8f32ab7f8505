"""Extraction options for jsgettext as a Pydantic model."""

import re
from collections.abc import Mapping
from typing import ClassVar, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..utils.core.exceptions import ConfigurationError

IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_$][\w$]*$")


class ExtractOptions(BaseModel):
    """
    Options recognized by every extraction entry point.

    Field aliases accept the hyphenated names used on the command line and in
    options files (``add-comments``, ``join-existing``, ``output-dir``,
    ``sort-output``), so a plain dictionary can be validated directly.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    keyword: str | None = Field(
        default=None,
        description="Alternate call name recognized alongside gettext",
    )
    add_comments: bool | str = Field(
        default=False,
        validation_alias=AliasChoices("add_comments", "add-comments"),
        description="True to keep every leading comment, or a tag that comments must contain",
    )
    join_existing: bool = Field(
        default=False,
        validation_alias=AliasChoices("join_existing", "join-existing"),
        description="Seed the catalog from the existing output file",
    )
    output: str = Field(
        default="messages.po",
        min_length=1,
        description="Catalog file name, used to locate the catalog to join",
    )
    output_dir: str | None = Field(
        default=None,
        validation_alias=AliasChoices("output_dir", "output-dir"),
        description="Directory holding the output catalog",
    )
    sort_output: bool = Field(
        default=False,
        validation_alias=AliasChoices("sort_output", "sort-output", "sort"),
        description="Order contexts and message ids lexicographically",
    )
    headers: dict[str, str] = Field(
        default_factory=dict,
        description="Header values that override loaded and default headers",
    )
    source_type: Literal["script", "module"] = Field(
        default="script",
        validation_alias=AliasChoices("source_type", "source-type"),
        description="Parse goal for JavaScript sources",
    )

    @field_validator("keyword")
    @classmethod
    def validate_keyword(cls, v: str | None) -> str | None:
        """Normalize an empty keyword to None."""
        if v is None:
            return None
        v = v.strip()
        if not v:
            return None
        if not IDENTIFIER_PATTERN.match(v):
            raise ValueError(f"Keyword must be a JavaScript identifier: {v!r}")
        return v

    @field_validator("add_comments")
    @classmethod
    def validate_add_comments(cls, v: bool | str) -> bool | str:
        """An empty tag disables comment extraction."""
        if isinstance(v, str) and not v:
            return False
        return v

    @field_validator("headers")
    @classmethod
    def normalize_header_names(cls, v: dict[str, str]) -> dict[str, str]:
        """Store header names lower-cased, the way catalogs are keyed."""
        return {key.strip().lower(): value.strip() for key, value in v.items() if key.strip()}

    @classmethod
    def from_value(
        cls, value: "ExtractOptions | Mapping[str, object] | None"
    ) -> "ExtractOptions":
        """
        Build options from an instance, a mapping or None.

        Args:
            value: Existing options, a mapping of option names, or None for defaults

        Returns:
            Validated options

        Raises:
            ConfigurationError: If the mapping does not validate
        """
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        try:
            return cls.model_validate(dict(value))
        except ValidationError as e:
            raise ConfigurationError(f"Invalid extraction options: {e}", context=dict(value)) from e
