from typing import Optional


class SuperASTError(Exception):
    """Base class for every fatal conversion failure."""

    def __init__(self, msg: str, line: Optional[int] = None):
        self.msg = msg
        self.line = line
        super().__init__(f"line {line}: {msg}" if line else msg)


class GoSyntaxError(SuperASTError):
    """The source could not be parsed; the normalizer never runs."""

    def __init__(self, msg: str, line: Optional[int] = None, column: Optional[int] = None):
        self.column = column
        super().__init__(msg, line)


class EntryPackageError(SuperASTError):
    def __init__(self, package: str, expected: str, line: Optional[int] = None):
        self.package = package
        super().__init__(f'Package name is not "{expected}": "{package}"', line)


class ImportNotAllowedError(SuperASTError):
    def __init__(self, path: str, line: Optional[int] = None):
        self.path = path
        super().__init__(f'Import path not allowed: "{path}"', line)


class UnsupportedSignatureError(SuperASTError):
    """Raised for function signatures the flattener cannot map to one return type."""

    def __init__(self, func_name: str, n_results: int, line: Optional[int] = None):
        self.func_name = func_name
        self.n_results = n_results
        super().__init__(f'Function "{func_name}" declares {n_results} results, at most one is supported', line)
