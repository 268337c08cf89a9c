"""Category registry mapping file extensions to media categories.

The registry is an immutable pydantic model built once per run and passed
explicitly to the scanner and classifier.
- Extensions are stored lowercase with a leading dot.
- No extension may belong to more than one category.
- Every real category has an entry, so every MediaFilter resolves to a set.

Extra extensions can be layered on from the ``[categories]`` table of the
config file via :meth:`CategoryRegistry.with_overrides`.
"""

from typing import Dict, FrozenSet, Iterable, Mapping

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from mediascan.models.core import Category, MediaFilter

DEFAULT_EXTENSIONS: Dict[Category, FrozenSet[str]] = {
    Category.AUDIO: frozenset(
        {".mp3", ".wav", ".flac", ".aac", ".ogg", ".m4a", ".wma", ".opus", ".aiff", ".ape"}
    ),
    Category.VIDEO: frozenset(
        {
            ".mp4",
            ".avi",
            ".mkv",
            ".mov",
            ".wmv",
            ".flv",
            ".webm",
            ".m4v",
            ".mpg",
            ".mpeg",
            ".3gp",
            ".divx",
        }
    ),
    Category.PICTURE: frozenset(
        {
            ".jpg",
            ".jpeg",
            ".png",
            ".gif",
            ".bmp",
            ".tiff",
            ".tif",
            ".svg",
            ".webp",
            ".ico",
            ".raw",
            ".heic",
        }
    ),
    # Password manager databases and exports.
    Category.VAULT: frozenset(
        {
            ".kdbx",
            ".1pif",
            ".agilekeychain",
            ".opvault",
            ".bw",
            ".enpass",
            ".psafe3",
            ".kdb",
            ".keepass",
            ".hc",
            ".tc",
        }
    ),
}


def normalize_extension(extension: str) -> str:
    """Lowercase *extension* and make sure it carries a leading dot.

    An empty string stays empty.
    """
    ext = extension.strip().lower()
    if ext and not ext.startswith("."):
        ext = "." + ext
    return ext


class CategoryRegistry(BaseModel):
    """Immutable mapping of category to the extensions it claims."""

    model_config = ConfigDict(frozen=True)

    extensions: Dict[Category, FrozenSet[str]]

    @field_validator("extensions", mode="before")
    @classmethod
    def _normalize(
        cls, value: Mapping[Category, Iterable[str]]
    ) -> Dict[Category, FrozenSet[str]]:
        return {
            Category(category): frozenset(normalize_extension(e) for e in exts if e)
            for category, exts in value.items()
        }

    @model_validator(mode="after")
    def _check_sets(self: "CategoryRegistry") -> "CategoryRegistry":
        """Ensure every real category is present and sets are disjoint.

        Raises:
            ValueError: If a category is missing, UNCLASSIFIED owns extensions,
                or an extension is claimed twice.
        """
        if Category.UNCLASSIFIED in self.extensions:
            raise ValueError("Unclassified cannot own extensions")
        missing = [c.value for c in Category.real() if c not in self.extensions]
        if missing:
            raise ValueError(f"Missing extension sets for: {', '.join(missing)}")

        owners: Dict[str, Category] = {}
        for category, exts in self.extensions.items():
            for ext in exts:
                if ext in owners:
                    raise ValueError(
                        f"Extension {ext} claimed by both {owners[ext].value} "
                        f"and {category.value}"
                    )
                owners[ext] = category
        return self

    def category_for(self: "CategoryRegistry", extension: str) -> Category:
        """Return the category owning *extension* (case-insensitive).

        Args:
            extension: File extension, with or without the leading dot.

        Returns:
            The owning category, or UNCLASSIFIED if none claims it.
        """
        ext = normalize_extension(extension)
        if not ext:
            return Category.UNCLASSIFIED
        for category, exts in self.extensions.items():
            if ext in exts:
                return category
        return Category.UNCLASSIFIED

    def extensions_for(self: "CategoryRegistry", media_filter: MediaFilter) -> FrozenSet[str]:
        """Return the extensions scanned for when *media_filter* is requested."""
        selected: set[str] = set()
        for category in media_filter.categories():
            selected.update(self.extensions[category])
        return frozenset(selected)

    def with_overrides(
        self: "CategoryRegistry", extra: Mapping[Category, Iterable[str]]
    ) -> "CategoryRegistry":
        """Return a new registry with *extra* extensions added per category.

        Raises:
            pydantic.ValidationError: If the result breaks disjointness.
        """
        merged: Dict[Category, set[str]] = {c: set(e) for c, e in self.extensions.items()}
        for category, exts in extra.items():
            merged.setdefault(Category(category), set()).update(exts)
        return CategoryRegistry(extensions=merged)


def default_registry() -> CategoryRegistry:
    """Build the registry of built-in extension sets."""
    return CategoryRegistry(extensions=DEFAULT_EXTENSIONS)
