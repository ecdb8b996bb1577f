import logging
from typing import Iterable

from superast.errors import GoSyntaxError, SuperASTError
from superast.goparser.parser import GoParser
from superast.ir.ir_nodes import Block
from superast.sema.builder import SuperASTBuilder
from superast.sema.validator import DEFAULT_ALLOWED_IMPORTS, DEFAULT_ENTRY_NAME
from superast.serializer import to_json

logger = logging.getLogger(__name__)


class SuperASTConverter:
    """
    Go source -> super-AST. The parser is built once and reused; every
    conversion gets its own builder, so one converter can serve many files.
    """

    def __init__(self, entry_name: str = DEFAULT_ENTRY_NAME,
                 allowed_imports: Iterable[str] = DEFAULT_ALLOWED_IMPORTS,
                 entry_return_type: str = "void"):
        self.parser = GoParser()
        self.options = {
            "entry_name": entry_name,
            "allowed_imports": tuple(allowed_imports),
            "entry_return_type": entry_return_type,
        }

    @classmethod
    def from_config(cls, config):
        return cls(**config.builder_options())

    def to_ir(self, code: str) -> Block:
        file_node = self.parser.parse(code)
        return SuperASTBuilder(**self.options).build(file_node)

    def convert(self, code: str, pretty: bool = False) -> str:
        """Raises GoSyntaxError or another SuperASTError on fatal failures."""
        return to_json(self.to_ir(code), pretty)

    def get_superast(self, code: str) -> dict:
        """
        Status-dict flavour of convert() for batch jobs: never raises for
        conversion failures.
        """
        try:
            root = self.to_ir(code)
            return {"status": "success", "ast": root.to_dict()}
        except GoSyntaxError as e:
            return {"status": "error", "stage": "parse", "message": str(e), "line": e.line, "column": e.column}
        except SuperASTError as e:
            logger.warning(f"Conversion rejected: {e}")
            return {"status": "error", "stage": "normalize", "message": str(e), "line": e.line}


def convert(code: str, pretty: bool = False, **options) -> str:
    return SuperASTConverter(**options).convert(code, pretty)
