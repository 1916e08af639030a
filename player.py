import logging

import colorama
from colorama import Fore, Style

from dialogue import Choice, Jump, NameChange, Phrase
from errors import ParleyRuntimeError

logger = logging.getLogger(__name__)


def unescape(text: str) -> str:
    # literals keep \" and \n as written; resolve them for display
    out = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == "\\" and i + 1 < len(text):
            nxt = text[i + 1]
            if nxt == "n":
                out.append("\n")
                i += 2
                continue
            if nxt == '"':
                out.append('"')
                i += 2
                continue
        out.append(ch)
        i += 1
    return "".join(out)


class Player:
    def __init__(self, dialogue, read_line=input, write=print, color: bool = True, max_steps: int | None = None):
        self.dialogue = dialogue
        self.read_line = read_line
        self.write = write
        self.color = color
        self.max_steps = max_steps  # set to an int to guard against endless loops

        self.ip = 0            # instruction pointer
        self.speakers = {}     # handle -> display name
        self.steps = 0

        if self.color:
            colorama.just_fix_windows_console()

    def paint(self, s: str, fore: str) -> str:
        if not self.color:
            return s
        return f"{fore}{s}{Style.RESET_ALL}"

    def speaker_names(self, handles) -> str:
        names = []
        for h in handles:
            if h not in self.speakers:
                raise ParleyRuntimeError(f"Speaker '{h}' has no name", ip=self.ip)
            names.append(self.speakers[h])
        return " & ".join(names)

    def jump_to(self, label: str, context: str):
        target = self.dialogue.label(label)
        if target is None:
            raise ParleyRuntimeError(f"Invalid {context} target: {label}", ip=self.ip)
        logger.debug("%s to %s (ip %s -> %s)", context, label, self.ip, target)
        self.ip = target

    def ask_choice(self, options) -> int:
        while True:
            for i, option in enumerate(options, start=1):
                self.write(f"{self.paint(str(i), Fore.YELLOW)}: {unescape(option.text)}")
            answer = self.read_line("> ").strip()
            if answer.isdecimal() and 1 <= int(answer) <= len(options):
                return int(answer) - 1
            self.write("Invalid choice index")

    def step(self) -> bool:
        """Run one instruction; returns True once playback is over."""
        entry = self.dialogue.get(self.ip)
        if entry is None:
            return True

        if isinstance(entry, NameChange):
            self.speakers[entry.handle] = unescape(entry.name)
            self.ip += 1
            return False

        if isinstance(entry, Phrase):
            text = unescape(entry.text)
            if entry.speakers:
                names = self.paint(self.speaker_names(entry.speakers), Fore.CYAN + Style.BRIGHT)
                text = f"{names}: {text}"
            self.write(text)
            self.read_line("")
            self.ip += 1
            return False

        if isinstance(entry, Choice):
            picked = self.ask_choice(entry.options)
            self.jump_to(entry.options[picked].label, "choice")
            return False

        if isinstance(entry, Jump):
            self.jump_to(entry.label, "jump")
            return False

        raise ParleyRuntimeError(f"Unknown instruction: {entry.__class__.__name__}", ip=self.ip)

    def run(self):
        while True:
            if self.max_steps is not None:
                self.steps += 1
                if self.steps > self.max_steps:
                    raise ParleyRuntimeError("Step limit exceeded (possible endless loop)", ip=self.ip)

            if self.step():
                break
