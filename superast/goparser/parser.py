import logging

from lark import Lark, exceptions

from superast.errors import GoSyntaxError
from superast.goparser.grammar import GO_GRAMMAR
from superast.goparser.preprocess import preprocess_go
from superast.goparser.semicolons import SemicolonInserter
from superast.goparser.transformer import GoTreeBuilder

logger = logging.getLogger(__name__)


def _describe(token) -> str:
    if token.type == SemicolonInserter.SEMI_type and token.value == ";":
        return "newline"
    if token.type == "$END":
        return "EOF"
    return f"'{token}'"


def _known(pos):
    return pos if pos and pos > 0 else None


# ==========================================
# Parser class
# ==========================================

class GoParser:
    def __init__(self):
        self.parser = Lark(GO_GRAMMAR, parser='lalr', postlex=SemicolonInserter(),
                           propagate_positions=True, maybe_placeholders=False)
        self.builder = GoTreeBuilder()

    @staticmethod
    def preprocess(code: str) -> str:
        return preprocess_go(code)

    def parse_tree(self, code: str):
        """Raw lark tree; raises GoSyntaxError with the position of the first error."""
        clean_code = self.preprocess(code)
        try:
            return self.parser.parse(clean_code)

        except exceptions.UnexpectedToken as e:
            msg = f"syntax error: unexpected {_describe(e.token)}, expected one of: {sorted(e.expected)}"
            logger.warning(f"Go parsing failed at {e.line}:{e.column}: {msg}")
            raise GoSyntaxError(msg, _known(e.line), _known(e.column)) from e

        except exceptions.UnexpectedCharacters as e:
            msg = f"syntax error: invalid character {clean_code[e.pos_in_stream]!r}"
            logger.warning(f"Go parsing failed at {e.line}:{e.column}: {msg}\n{e.get_context(clean_code)}")
            raise GoSyntaxError(msg, _known(e.line), _known(e.column)) from e

        except exceptions.UnexpectedInput as e:
            msg = "syntax error: unexpected end of input"
            logger.warning(f"Go parsing failed: {msg}")
            raise GoSyntaxError(msg, _known(getattr(e, "line", None)), _known(getattr(e, "column", None))) from e

    def parse(self, code: str) -> dict:
        """
        Parses Go source into the native tree (dicts shaped like go/ast nodes).
        Errors raised while building the tree surface as GoSyntaxError as well.
        """
        tree = self.parse_tree(code)
        try:
            return self.builder.transform(tree)
        except exceptions.VisitError as e:
            if isinstance(e.orig_exc, GoSyntaxError):
                logger.warning(f"Go parsing failed: {e.orig_exc}")
                raise e.orig_exc from None
            raise
