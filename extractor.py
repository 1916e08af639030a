from dataclasses import dataclass

from dialogue import Choice, ChoiceOption, Jump, NameChange, Phrase
from syntax_tree import Rule


@dataclass(frozen=True)
class LabelBinding:
    name: str


def extract_statement(node):
    """Turn a `statement` node into a LabelBinding or one instruction."""
    if node.rule == Rule.STATEMENT:
        node = node.first()

    if node.rule == Rule.LABEL:
        return LabelBinding(node.first(Rule.IDENTIFIER).value)
    if node.rule == Rule.NAME_STATEMENT:
        return extract_name(node)
    if node.rule == Rule.PHRASE_STATEMENT:
        return extract_phrase(node)
    if node.rule == Rule.CHOICE_STATEMENT:
        return extract_choice(node)
    if node.rule == Rule.JUMP_STATEMENT:
        return Jump(node.first(Rule.IDENTIFIER).value)

    raise ValueError(f"Not a statement node: {node.rule.value}")


def handle_name(node):
    return node.first(Rule.IDENTIFIER).value


def extract_name(node):
    handle = node.first(Rule.HANDLE)
    literal = node.first(Rule.STRING_LITERAL)
    return NameChange(handle_name(handle), literal.value)


def extract_phrase(node):
    speakers = ()
    prefix = node.first()
    if prefix.rule == Rule.HANDLE_GROUP:
        speakers = tuple(handle_name(h) for h in prefix.children)
    elif prefix.rule == Rule.HANDLE:
        speakers = (handle_name(prefix),)
    literal = node.first(Rule.STRING_LITERAL)
    return Phrase(speakers, literal.value)


def extract_option(node):
    literal, target = node.children
    return ChoiceOption(literal.value, target.value)


def extract_choice(node):
    inner = node.first()
    if inner.rule == Rule.CHOICE_GROUP:
        options = tuple(extract_option(c) for c in inner.children)
    else:
        options = (extract_option(inner),)
    return Choice(options)
