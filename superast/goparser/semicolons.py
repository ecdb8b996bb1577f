from typing import Iterator, Optional

from lark import Token
from lark.lark import PostLex

# A newline ends a statement when the line's final token is one of these.
_TERMINATING_TYPES = {"IDENT", "INT", "FLOAT", "CHAR", "STRING", "RAW_STRING"}
_TERMINATING_VALUES = {"break", "continue", "fallthrough", "return", "++", "--", ")", "]", "}"}


class SemicolonInserter(PostLex):
    """
    Go automatic semicolon insertion as a lark postlexer.

    Newline tokens (_NL) are dropped unless the previous token may end a
    statement, in which case they become _SEMI. A file that does not end with a
    newline gets a closing _SEMI as well.
    """

    NL_type = "_NL"
    SEMI_type = "_SEMI"
    always_accept = (NL_type,)

    @staticmethod
    def _ends_statement(token: Optional[Token]) -> bool:
        if token is None:
            return False
        if token.type in _TERMINATING_TYPES:
            return True
        return token.value in _TERMINATING_VALUES

    def process(self, stream: Iterator[Token]) -> Iterator[Token]:
        last = None
        for token in stream:
            if token.type == self.NL_type:
                if self._ends_statement(last):
                    last = Token.new_borrow_pos(self.SEMI_type, ";", token)
                    yield last
                continue
            last = token
            yield token

        if self._ends_statement(last):
            yield Token.new_borrow_pos(self.SEMI_type, ";", last)
