from errors import ParleySyntaxError


class Token:
    def __init__(self, type, value=None, line=1, column=1, pos=0, end=0):
        self.type = type
        self.value = value
        self.line = line
        self.column = column
        self.pos = pos    # offset of the first character
        self.end = end    # offset just past the last character

    def __repr__(self):
        if self.value is not None:
            return f"{self.type}({self.value})"
        return f"{self.type}"


# single-character punctuation
PUNCTUATION = {
    "(": "LPAREN",
    ")": "RPAREN",
    "&": "AMP",
    "|": "PIPE",
    ":": "COLON",
    ";": "SEMI",
    "=": "EQUALS",
    "?": "QUESTION",
}


def is_ident_start(ch):
    return ch is not None and (ch == "_" or "a" <= ch <= "z" or "A" <= ch <= "Z")


def is_ident_char(ch):
    return is_ident_start(ch) or (ch is not None and "0" <= ch <= "9")


class Lexer:
    def __init__(self, text):
        self.text = text
        self.pos = 0
        self.current_char = text[0] if text else None
        self.line = 1
        self.column = 1

    def advance(self):
        # track line/column based on current_char before moving
        if self.current_char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.pos += 1
        if self.pos >= len(self.text):
            self.current_char = None
        else:
            self.current_char = self.text[self.pos]

    def peek(self):
        nxt = self.pos + 1
        if nxt >= len(self.text):
            return None
        return self.text[nxt]

    def error(self, message, line=None, column=None):
        raise ParleySyntaxError(message, line or self.line, column or self.column)

    # whitespace of any kind (newlines included) separates tokens
    def skip_whitespace(self):
        while self.current_char and self.current_char in " \t\r\n":
            self.advance()

    def read_comment(self):
        start_line, start_col, start = self.line, self.column, self.pos
        # consume /*
        self.advance()
        self.advance()
        while self.current_char is not None:
            if self.current_char == "*" and self.peek() == "/":
                self.advance()
                self.advance()
                body = self.text[start + 2 : self.pos - 2]
                return Token("COMMENT", body, line=start_line, column=start_col, pos=start, end=self.pos)
            self.advance()
        self.error("Unclosed comment", start_line, start_col)

    def read_identifier(self):
        start_line, start_col, start = self.line, self.column, self.pos
        while is_ident_char(self.current_char):
            self.advance()
        name = self.text[start : self.pos]
        return Token("IDENT", name, line=start_line, column=start_col, pos=start, end=self.pos)

    def read_handle(self):
        start_line, start_col, start = self.line, self.column, self.pos
        self.advance()  # skip @
        if not is_ident_start(self.current_char):
            self.error("Handle can't be empty: expected an identifier after '@'", start_line, start_col)
        name = self.read_identifier().value
        return Token("HANDLE", name, line=start_line, column=start_col, pos=start, end=self.pos)

    def read_string(self):
        start_line, start_col, start = self.line, self.column, self.pos
        self.advance()  # skip opening quote

        while self.current_char is not None and self.current_char != '"':
            if self.current_char == "\\":
                esc_line, esc_col = self.line, self.column
                self.advance()
                # only \" and \n are part of the language
                if self.current_char not in ('"', "n"):
                    shown = self.current_char if self.current_char is not None else "end of input"
                    self.error(f"Unsupported escape sequence '\\{shown}' in string literal", esc_line, esc_col)
            self.advance()

        if self.current_char != '"':
            self.error("Unclosed string", start_line, start_col)

        self.advance()  # skip closing quote
        # raw inner slice, escapes kept as written
        inner = self.text[start + 1 : self.pos - 1]
        return Token("STRING", inner, line=start_line, column=start_col, pos=start, end=self.pos)

    def get_next_token(self):
        while self.current_char:

            if self.current_char in " \t\r\n":
                self.skip_whitespace()
                continue

            if self.current_char == "/" and self.peek() == "*":
                return self.read_comment()

            if is_ident_start(self.current_char):
                return self.read_identifier()

            if self.current_char.isdigit():
                start_line, start_col, start = self.line, self.column, self.pos
                while is_ident_char(self.current_char):
                    self.advance()
                word = self.text[start : self.pos]
                self.error(f"Invalid identifier '{word}': identifiers can't start with a digit", start_line, start_col)

            if self.current_char == "@":
                return self.read_handle()

            if self.current_char == '"':
                return self.read_string()

            kind = PUNCTUATION.get(self.current_char)
            if kind is not None:
                start_line, start_col, start = self.line, self.column, self.pos
                self.advance()
                return Token(kind, line=start_line, column=start_col, pos=start, end=self.pos)

            self.error(f"Unknown character: {self.current_char!r}")

        return Token("EOF", line=self.line, column=self.column, pos=self.pos, end=self.pos)

    def tokens(self):
        """Lex the whole text, comments included, up to and including EOF."""
        out = []
        while True:
            tok = self.get_next_token()
            out.append(tok)
            if tok.type == "EOF":
                return out
