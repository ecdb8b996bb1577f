from typing import Iterable

from superast.errors import EntryPackageError, ImportNotAllowedError

DEFAULT_ENTRY_NAME = "main"
DEFAULT_ALLOWED_IMPORTS = ("fmt", "log")


class EntryValidator:
    """Gate run before any IR is built: entry package name and import allow-list."""

    def __init__(self, entry_name: str = DEFAULT_ENTRY_NAME,
                 allowed_imports: Iterable[str] = DEFAULT_ALLOWED_IMPORTS):
        self.entry_name = entry_name
        self.allowed_imports = frozenset(allowed_imports)

    def validate(self, file_node):
        if file_node["package"] != self.entry_name:
            raise EntryPackageError(file_node["package"], self.entry_name, file_node["line"])
        for spec in file_node["imports"]:
            if spec["path"] not in self.allowed_imports:
                raise ImportNotAllowedError(spec["path"], spec["line"])
