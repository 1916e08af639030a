from enum import Enum


class Rule(Enum):
    PROGRAM = "program"
    STATEMENT = "statement"
    LABEL = "label"
    NAME_STATEMENT = "name_statement"
    PHRASE_STATEMENT = "phrase_statement"
    CHOICE_STATEMENT = "choice_statement"
    JUMP_STATEMENT = "jump_statement"
    HANDLE = "handle"
    HANDLE_GROUP = "handle_group"
    CHOICE = "choice"
    CHOICE_GROUP = "choice_group"
    STRING_LITERAL = "string_literal"
    IDENTIFIER = "identifier"
    COMMENT = "comment"


class Node:
    """A syntax tree node.

    `text` is the exact source slice the rule matched. `value` is set for
    identifiers and handles (the bare name), string literals (the raw text
    between the quotes) and comments (the body).
    """

    def __init__(self, rule, text, children=None, value=None, line=None, column=None):
        self.rule = rule
        self.text = text
        self.children = children or []
        self.value = value
        self.line = line
        self.column = column

    def first(self, rule=None):
        # first child, optionally the first one of a given rule
        for child in self.children:
            if rule is None or child.rule == rule:
                return child
        return None

    def __repr__(self):
        return f"Node({self.rule.value}, {self.text!r})"


def node_to_dict(node):
    if node is None:
        return None

    d = {"rule": node.rule.value}
    if node.value is not None:
        d["value"] = node.value
    if node.line is not None:
        d["at"] = f"{node.line}:{node.column}"
    if node.children:
        d["children"] = [node_to_dict(c) for c in node.children]
    return d
