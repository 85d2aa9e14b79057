"""Registry of available page types.

Page types are discovered from template and blueprint directories.
Build one registry at start-up and hand it to whatever needs it::

    types = PageTypes()
    types.scan_templates("theme/templates")
    types.scan_blueprints("theme/blueprints")
    types.page_select()     # {"blog": "blog", "default": "default", ...}
    types.modular_select()  # {"modular/hero": "hero", ...}
"""

from __future__ import annotations

from pathlib import Path

MODULAR_PREFIX = "modular/"


class PageTypes:
    """Page type names mapped to the file that declares each one."""

    __slots__ = ("_types",)

    def __init__(self) -> None:
        self._types: dict[str, Path | None] = {"default": None}

    def register(self, name: str, source: Path | None = None) -> None:
        """Add a type; a blueprint source replaces an earlier ``None``."""
        if source is not None or name not in self._types:
            self._types[name] = source

    def scan_templates(self, directory: str | Path, extension: str = ".html") -> None:
        """Register one type per template file under *directory*."""
        self._scan(Path(directory), extension, keep_source=False)

    def scan_blueprints(self, directory: str | Path, extension: str = ".yaml") -> None:
        """Register one type per blueprint file, remembering the file."""
        self._scan(Path(directory), extension, keep_source=True)

    def _scan(self, directory: Path, extension: str, *, keep_source: bool) -> None:
        if not directory.is_dir():
            return
        for file in sorted(directory.rglob(f"*{extension}")):
            if any(part.startswith(".") for part in file.relative_to(directory).parts):
                continue
            name = file.relative_to(directory).as_posix()[: -len(extension)]
            self.register(name, file if keep_source else None)

    def blueprint(self, name: str) -> Path | None:
        """Blueprint file for *name*, falling back to the default type's."""
        if self._types.get(name) is not None:
            return self._types[name]
        return self._types.get("default")

    def page_select(self) -> dict[str, str]:
        return {name: name for name in sorted(self._types) if not name.startswith(MODULAR_PREFIX)}

    def modular_select(self) -> dict[str, str]:
        return {
            name: name[len(MODULAR_PREFIX) :]
            for name in sorted(self._types)
            if name.startswith(MODULAR_PREFIX)
        }

    def clear(self) -> None:
        self._types = {"default": None}

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __len__(self) -> int:
        return len(self._types)
