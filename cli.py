import logging
import sys
import traceback

from colorama import Fore, Style

from compiler import compile_source
from dialogue import Choice, Dialogue, Jump, NameChange, Phrase
from errors import ParleyError
from parser import parse
from player import Player
from syntax_tree import node_to_dict


USAGE = """Usage:
  python cli.py parse <file.parley>
  python cli.py build <file.parley>
  python cli.py run <file.parley>
  python cli.py example
  (optional) --debug to show Python traceback and debug logs
  (optional) --no-color to disable colored output"""


def pretty(obj, indent=0):
    sp = "  " * indent
    if isinstance(obj, dict):
        lines = []
        for k, v in obj.items():
            if isinstance(v, (dict, list)):
                lines.append(f"{sp}{k}:")
                lines.append(pretty(v, indent + 1))
            else:
                lines.append(f"{sp}{k}: {v}")
        return "\n".join(lines)
    if isinstance(obj, list):
        lines = []
        for item in obj:
            lines.append(f"{sp}-")
            lines.append(pretty(item, indent + 1))
        return "\n".join(lines)
    return f"{sp}{obj}"


def format_entry(entry):
    if isinstance(entry, NameChange):
        return f'NAME    @{entry.handle} = "{entry.name}"'
    if isinstance(entry, Phrase):
        who = " & ".join(f"@{h}" for h in entry.speakers)
        return f'PHRASE  {who}: "{entry.text}"'
    if isinstance(entry, Choice):
        opts = " | ".join(f'"{o.text}" -> {o.label}' for o in entry.options)
        return f"CHOICE  {opts}"
    if isinstance(entry, Jump):
        return f"JUMP    {entry.label}"
    return repr(entry)


class Options:
    def __init__(self, debug=False, color=True):
        self.debug = debug
        self.color = color


def report(e, opts):
    if opts.debug:
        traceback.print_exc()
        return
    msg = str(e)
    if opts.color:
        msg = f"{Fore.RED}{msg}{Style.RESET_ALL}"
    print(msg)


def read_source(path):
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def cmd_parse(path, opts):
    try:
        program = parse(read_source(path))
    except (ParleyError, OSError) as e:
        report(e, opts)
        sys.exit(1)

    print(pretty(node_to_dict(program)))


def cmd_build(path, opts):
    try:
        dlg = compile_source(read_source(path))
    except (ParleyError, OSError) as e:
        report(e, opts)
        sys.exit(1)

    print("INSTRUCTIONS:")
    for i, entry in enumerate(dlg.entries):
        print(f"  {i:04d}  {format_entry(entry)}")

    print("\nLABELS:")
    for name, index in sorted(dlg.labels.items(), key=lambda kv: (kv[1], kv[0])):
        print(f"  {name} -> {index:04d}")


def play(dlg, opts):
    try:
        Player(dlg, color=opts.color).run()
    except (EOFError, KeyboardInterrupt):
        print()
    except ParleyError as e:
        report(e, opts)
        sys.exit(1)


def cmd_run(path, opts):
    try:
        dlg = compile_source(read_source(path))
    except (ParleyError, OSError) as e:
        report(e, opts)
        sys.exit(1)

    play(dlg, opts)


def main():
    argv = sys.argv[1:]
    opts = Options()
    if "--debug" in argv:
        opts.debug = True
        argv.remove("--debug")
    if "--no-color" in argv:
        opts.color = False
        argv.remove("--no-color")

    logging.basicConfig(
        level=logging.DEBUG if opts.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not argv:
        print(USAGE)
        sys.exit(1)

    cmd = argv[0]

    if cmd == "example":
        if len(argv) != 1:
            print("example does not accept extra arguments.")
            sys.exit(1)
        play(Dialogue.example(), opts)
        return

    if len(argv) != 2:
        print(USAGE)
        sys.exit(1)

    path = argv[1]

    if cmd == "parse":
        cmd_parse(path, opts)
    elif cmd == "build":
        cmd_build(path, opts)
    elif cmd == "run":
        cmd_run(path, opts)
    else:
        print(f"Unknown command: {cmd}")
        sys.exit(1)


if __name__ == "__main__":
    main()
