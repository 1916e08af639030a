import logging

from dialogue import Choice, Dialogue, Jump, NameChange, Phrase
from errors import DuplicateLabelError, UndefinedLabelError, UndefinedSpeakerError
from extractor import LabelBinding, extract_statement
from parser import parse
from syntax_tree import Rule

logger = logging.getLogger(__name__)


class Compiler:
    """Resolve a parsed program into a Dialogue in one forward pass.

    Labels may be referenced before they are defined; those references are
    parked in `unresolved` and checked once the whole program has been seen.
    Speakers must be introduced before any phrase uses them.
    """

    def __init__(self):
        self.entries = []
        self.labels = {}
        self.known_speakers = set()
        # insertion-ordered so the reported undefined label is the first one referenced
        self.unresolved = {}

    def compile(self, node):
        # entry point
        if node.rule != Rule.PROGRAM:
            raise TypeError("Compiler expects a program node at the top")

        statements = [c for c in node.children if c.rule == Rule.STATEMENT]
        logger.debug("resolving %s statements", len(statements))

        for stmt in statements:
            self.compile_stmt(extract_statement(stmt))

        if self.unresolved:
            name = next(iter(self.unresolved))
            raise UndefinedLabelError(name)

        logger.debug("resolved %s instructions, %s labels", len(self.entries), len(self.labels))
        return Dialogue(self.entries, self.labels)

    # -------- statements --------
    def compile_stmt(self, item):
        if isinstance(item, LabelBinding):
            self.bind_label(item.name)
            return

        if isinstance(item, NameChange):
            self.known_speakers.add(item.handle)
        elif isinstance(item, Phrase):
            for handle in item.speakers:
                if handle not in self.known_speakers:
                    raise UndefinedSpeakerError(handle)
        elif isinstance(item, Choice):
            for option in item.options:
                self.reference_label(option.label)
        elif isinstance(item, Jump):
            self.reference_label(item.label)
        else:
            raise TypeError(f"Unknown instruction: {item.__class__.__name__}")

        self.entries.append(item)

    def bind_label(self, name):
        if name in self.labels:
            raise DuplicateLabelError(name)
        # a label names the slot of the next instruction emitted
        self.labels[name] = len(self.entries)
        self.unresolved.pop(name, None)
        logger.debug("label %s -> %s", name, self.labels[name])

    def reference_label(self, name):
        if name in self.labels or name in self.unresolved:
            return
        logger.debug("forward reference to label %s", name)
        self.unresolved[name] = len(self.entries)


def compile_source(source):
    """Parse and resolve a complete script."""
    program = parse(source)
    return Compiler().compile(program)
