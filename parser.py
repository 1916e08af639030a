from errors import ParleySyntaxError
from lexer import Lexer
from syntax_tree import Node, Rule


TOKEN_NAMES = {
    "IDENT": "identifier",
    "STRING": "string literal",
    "HANDLE": "handle",
    "LPAREN": "'('",
    "RPAREN": "')'",
    "AMP": "'&'",
    "PIPE": "'|'",
    "COLON": "':'",
    "SEMI": "';'",
    "EQUALS": "'='",
    "QUESTION": "'?'",
    "EOF": "end of input",
}


def describe(tok):
    if tok.type == "IDENT":
        return f"identifier '{tok.value}'"
    if tok.type == "HANDLE":
        return f"handle '@{tok.value}'"
    if tok.type == "STRING":
        return "string literal"
    return TOKEN_NAMES.get(tok.type, tok.type)


class Parser:
    def __init__(self, lexer):
        self.lexer = lexer
        self.source = lexer.text
        self.comments = []  # comment tokens seen since the last flush
        self.prev_end = 0   # end offset of the last consumed token
        self.current_token = self._fetch()
        self.next_token = self._fetch()

    def _fetch(self):
        # comments may appear between any two tokens
        tok = self.lexer.get_next_token()
        while tok.type == "COMMENT":
            self.comments.append(tok)
            tok = self.lexer.get_next_token()
        return tok

    # move to next token, but only if it matches what we expect
    def eat(self, token_type):
        tok = self.current_token
        if tok.type != token_type:
            raise ParleySyntaxError(
                f"Expected {TOKEN_NAMES.get(token_type, token_type)}, got {describe(tok)}",
                tok.line,
                tok.column,
            )
        self.prev_end = tok.end
        self.current_token = self.next_token
        self.next_token = self._fetch()
        return tok

    def error_here(self, message):
        tok = self.current_token
        raise ParleySyntaxError(message, tok.line, tok.column)

    def node(self, rule, start_tok, children=None, value=None):
        text = self.source[start_tok.pos : self.prev_end]
        return Node(rule, text, children, value=value, line=start_tok.line, column=start_tok.column)

    def flush_comments(self):
        nodes = []
        for tok in self.comments:
            nodes.append(Node(Rule.COMMENT, self.source[tok.pos : tok.end], value=tok.value, line=tok.line, column=tok.column))
        self.comments = []
        return nodes

    # ---------- TOP LEVEL ----------
    def parse(self):
        children = self.flush_comments()

        while self.current_token.type != "EOF":
            children.append(self.statement())
            children.extend(self.flush_comments())

        children.extend(self.flush_comments())
        return Node(Rule.PROGRAM, self.source, children, line=1, column=1)

    def parse_rule(self, rule):
        """Parse the whole input as exactly one `rule`."""
        if rule == Rule.PROGRAM:
            return self.parse()
        if rule == Rule.COMMENT:
            return self.comment_only()

        method = getattr(self, rule.value)
        node = method()
        if self.current_token.type != "EOF":
            self.error_here(f"Unexpected {describe(self.current_token)} after {rule.value}")
        return node

    def comment_only(self):
        if len(self.comments) != 1 or self.current_token.type != "EOF":
            self.error_here("Expected a single comment")
        return self.flush_comments()[0]

    # ---------- STATEMENTS ----------
    def statement(self):
        tok = self.current_token

        if tok.type == "IDENT":
            # name: (colon touching the name) is always a label, even for 'jump'
            if self.next_token.type == "COLON" and self.next_token.pos == tok.end:
                inner = self.label()
                return self.node(Rule.STATEMENT, tok, [inner])
            if tok.value == "jump":
                inner = self.jump_statement()
            elif self.next_token.type == "COLON":
                self.error_here(f"Label '{tok.value}' must be followed directly by ':'")
            else:
                self.error_here(f"Unexpected {describe(tok)}: expected a label or a statement")
        elif tok.type == "HANDLE":
            if self.next_token.type == "EQUALS":
                inner = self.name_statement()
            else:
                inner = self.phrase_statement()
        elif tok.type in ("LPAREN", "COLON"):
            inner = self.phrase_statement()
        elif tok.type == "QUESTION":
            inner = self.choice_statement()
        else:
            self.error_here(f"Unexpected {describe(tok)}: expected a statement")

        self.eat("SEMI")
        return self.node(Rule.STATEMENT, tok, [inner])

    def label(self):
        tok = self.current_token
        name = self.identifier()
        colon = self.current_token
        if colon.type != "COLON" or colon.pos != tok.end:
            self.error_here(f"Expected ':' directly after label '{tok.value}'")
        self.eat("COLON")
        return self.node(Rule.LABEL, tok, [name])

    def name_statement(self):
        # @handle = "Display name"
        tok = self.current_token
        handle = self.handle()
        self.eat("EQUALS")
        literal = self.string_literal()
        return self.node(Rule.NAME_STATEMENT, tok, [handle, literal])

    def phrase_statement(self):
        # [@h | (@h & @h ...)] : "text"
        tok = self.current_token
        children = []
        if tok.type == "HANDLE":
            children.append(self.handle())
        elif tok.type == "LPAREN":
            children.append(self.handle_group())
        self.eat("COLON")
        children.append(self.string_literal())
        return self.node(Rule.PHRASE_STATEMENT, tok, children)

    def choice_statement(self):
        tok = self.current_token
        self.eat("QUESTION")
        if self.current_token.type == "LPAREN":
            inner = self.choice_group()
        else:
            inner = self.choice()
        return self.node(Rule.CHOICE_STATEMENT, tok, [inner])

    def jump_statement(self):
        tok = self.current_token
        if tok.type != "IDENT" or tok.value != "jump":
            got = describe(tok)
            self.error_here(f"Expected 'jump', got {got}")
        self.eat("IDENT")
        target = self.identifier()
        return self.node(Rule.JUMP_STATEMENT, tok, [target])

    # ---------- GROUPS ----------
    def handle_group(self):
        tok = self.current_token
        self.eat("LPAREN")
        handles = [self.handle()]
        while self.current_token.type == "AMP":
            self.eat("AMP")
            handles.append(self.handle())
        self.eat("RPAREN")
        return self.node(Rule.HANDLE_GROUP, tok, handles)

    def choice_group(self):
        tok = self.current_token
        self.eat("LPAREN")
        choices = [self.choice()]
        while self.current_token.type == "PIPE":
            self.eat("PIPE")
            choices.append(self.choice())
        self.eat("RPAREN")
        return self.node(Rule.CHOICE_GROUP, tok, choices)

    def choice(self):
        # "text" : label
        tok = self.current_token
        literal = self.string_literal()
        self.eat("COLON")
        target = self.identifier()
        return self.node(Rule.CHOICE, tok, [literal, target])

    # ---------- LEAVES ----------
    def handle(self):
        tok = self.eat("HANDLE")
        name = Node(
            Rule.IDENTIFIER,
            tok.value,
            value=tok.value,
            line=tok.line,
            column=tok.column + 1,
        )
        return self.node(Rule.HANDLE, tok, [name], value=tok.value)

    def identifier(self):
        tok = self.eat("IDENT")
        return self.node(Rule.IDENTIFIER, tok, value=tok.value)

    def string_literal(self):
        tok = self.eat("STRING")
        return self.node(Rule.STRING_LITERAL, tok, value=tok.value)


def parse(source, rule=Rule.PROGRAM):
    lexer = Lexer(source)
    parser = Parser(lexer)
    return parser.parse_rule(rule)
