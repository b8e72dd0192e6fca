"""Place-category catalog loaded from static reference data."""

import json
from pathlib import Path

DATA_DIR = Path(__file__).parent.parent / "data"


class CategoryCatalog:
    """Place-type vocabulary plus the user-keyword to place-type table."""

    def __init__(
        self,
        groups: dict[str, list[str]],
        keywords: dict[str, list[str]],
        default: list[str],
        display_names: dict[str, str] | None = None,
    ) -> None:
        self._groups = groups
        self._keywords = keywords
        self._default = list(default)
        self._display_names = display_names or {}
        self._known = {t for types in groups.values() for t in types}
        self._known.update(t for types in keywords.values() for t in types)

    @classmethod
    def load(cls, path: Path | str | None = None) -> "CategoryCatalog":
        """Load the catalog JSON (defaults to the bundled place_categories.json)."""
        catalog_path = Path(path) if path else DATA_DIR / "place_categories.json"
        with open(catalog_path) as f:
            data = json.load(f)

        return cls(
            groups=data["groups"],
            keywords=data["keywords"],
            default=data["default"],
            display_names=data.get("display_names"),
        )

    @property
    def default_types(self) -> list[str]:
        return list(self._default)

    @property
    def all_types(self) -> set[str]:
        return set(self._known)

    def is_known(self, place_type: str) -> bool:
        return place_type in self._known

    def types_for_category(self, category: str | None) -> list[str]:
        """Map a user category ("museums", "beach", "coffee") onto place types.

        Tries, in order: exact keyword, keyword/category substring either way,
        then the category as a literal place type. Returns [] when nothing fits.
        """
        if not category:
            return []
        normalized = category.lower().strip()

        if normalized in self._keywords:
            return list(self._keywords[normalized])

        if len(normalized) >= 3:
            for key, types in self._keywords.items():
                if normalized in key or key in normalized:
                    return list(types)

        if normalized in self._known:
            return [normalized]
        return []

    def display_name(self, place_type: str) -> str:
        if place_type in self._display_names:
            return self._display_names[place_type]
        return " ".join(word.capitalize() for word in place_type.split("_"))
