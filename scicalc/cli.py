"""Command-line front end: one-shot evaluation or an interactive REPL."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Dict, List, Optional, Tuple

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import FileHistory

from .config import Settings, configure_logging, load_settings
from .evaluator import AngleMode, environment_for
from .session import ERROR_DISPLAY, CalculatorSession

logger = logging.getLogger(__name__)

_FUNCTION_NAMES = environment_for(AngleMode.DEGREES).names()

_HELP_TOPICS: Dict[str, str] = {
    'general': (
        "Calculator REPL help:\n"
        "Type an expression and press Enter. Examples:\n"
        "  2^10        -> 1024\n"
        "  5!          -> 120\n"
        "  sin(90)     -> 1 (in DEG mode)\n"
        "  10%         -> 0.1\n"
        "  pow(2, 0.5) -> 1.414214\n"
        "Commands:\n"
        "  :help [topic]     show help (topics: functions, memory)\n"
        "  :deg, :rad        switch angle mode\n"
        "  :angle            toggle angle mode\n"
        "  :history          list recent results\n"
        "  :recall N         restore history entry N (1 = most recent)\n"
        "  :mc :mr :m+ :m-   memory clear / recall / add / subtract\n"
        "  :mem              show memory value\n"
        "  :clear            reset the display\n"
        "  :exit             exit\n"
    ),
    'functions': (
        "Functions and constants:\n"
        + ", ".join(_FUNCTION_NAMES) +
        "\nlog is base 10, ln is natural. Trig functions follow the angle mode.\n"
    ),
    'memory': (
        "Memory register (starts at 0):\n"
        "  :m+  add the last result     :m-  subtract the last result\n"
        "  :mr  print the stored value at full precision, ready to paste\n"
        "  :mc  reset to 0\n"
    ),
}


def show_help(topic: Optional[str] = None) -> str:
    """Return help text for topic or general if None."""
    if not topic:
        return _HELP_TOPICS['general']
    return _HELP_TOPICS.get(topic.lower(), f"No help available for topic '{topic}'")


class REPL:
    """Read-Eval-Print Loop over a CalculatorSession."""

    def __init__(self, settings: Optional[Settings] = None, verbose: bool = False):
        self.settings = settings or load_settings()
        self.session = CalculatorSession(self.settings.angle_mode, self.settings.history_limit)
        self.verbose = verbose

    def _run_command(self, cmd: str, args: List[str]) -> str:
        """Execute a colon command. Raises EOFError for exit/quit."""
        cmd = cmd.lower()
        session = self.session
        if cmd in {'exit', 'quit'}:
            raise EOFError()
        if cmd == 'help':
            return show_help(args[0] if args else None)
        if cmd in {'deg', 'rad'}:
            return f"Angle mode: {session.set_angle_mode(AngleMode(cmd)).value}"
        if cmd == 'angle':
            return f"Angle mode: {session.toggle_angle_mode().value}"
        if cmd == 'history':
            entries = list(session.history)
            if not entries:
                return "(no history)"
            return "\n".join(
                f"{i}: {entry.expression} = {entry.result}" for i, entry in enumerate(entries, 1)
            )
        if cmd == 'recall':
            if not args or not args[0].isdigit():
                return "Usage: :recall N"
            try:
                entry = session.recall_history(int(args[0]) - 1)
            except IndexError:
                return f"No history entry {args[0]}"
            return entry.result
        if cmd == 'mc':
            session.memory_clear()
            return "MEM: 0"
        if cmd == 'mr':
            return session.memory.as_literal()
        if cmd == 'm+':
            session.memory_add()
            return f"MEM: {session.memory.as_text()}"
        if cmd == 'm-':
            session.memory_subtract()
            return f"MEM: {session.memory.as_text()}"
        if cmd == 'mem':
            return f"MEM: {session.memory.as_text()}"
        if cmd == 'clear':
            session.clear()
            return session.last_result
        return f"Unknown command: {cmd}"

    def _process_command(self, line: str) -> Optional[str]:
        """Return the response to a ':command' line, or None if the line is an expression."""
        s = line.strip()
        if not s.startswith(':'):
            return None
        parts = s[1:].split()
        if not parts:
            return "No command specified. Use :help for available commands."
        return self._run_command(parts[0], parts[1:])

    def _evaluate_buffer(self) -> Tuple[bool, str]:
        calc = self.session.evaluate()
        if calc is not None:
            return True, calc.display
        error = self.session.last_error
        if self.verbose and error is not None:
            return False, f"{ERROR_DISPLAY}: {error.kind}: {error}"
        return False, self.session.last_result

    def evaluate_line(self, line: str) -> Tuple[bool, str]:
        """Evaluate a single line (either command or expression). Returns (ok, output)."""
        cmd_out = self._process_command(line)
        if cmd_out is not None:
            return True, cmd_out
        if not line.strip():
            return True, self.session.last_result
        self.session.set_expression(line.strip())
        return self._evaluate_buffer()

    def _prompt_lines(self):
        if not sys.stdin.isatty():
            for line in sys.stdin:
                yield line.rstrip('\n')
            return
        prompt = PromptSession(history=FileHistory(self.settings.history_file))
        completer = WordCompleter(_FUNCTION_NAMES)
        while True:
            try:
                yield prompt.prompt(f"{self.session.angle_mode.value}> ", completer=completer)
            except KeyboardInterrupt:
                print("^C")

    def repl_loop(self) -> None:
        print("Scientific calculator. Type :help for help. Ctrl-D or :exit to quit.")
        try:
            for line in self._prompt_lines():
                if not line.strip():
                    continue
                _, out = self.evaluate_line(line)
                print(out)
        except EOFError:
            pass
        print("Exiting.")


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="scicalc", description="Scientific expression calculator.")
    parser.add_argument(
        "-e", "--expression",
        type=str,
        help="Evaluate a single expression and exit.",
    )
    parser.add_argument(
        "--angle",
        type=AngleMode,
        help="Angle mode for trigonometric functions: deg or rad (default: SCICALC_ANGLE_MODE or deg).",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show the error kind and message instead of a bare 'Error'.",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    settings = load_settings(angle_mode=args.angle)
    configure_logging(settings)
    logger.debug(f"Loaded settings: {settings!r}")
    repl = REPL(settings, verbose=args.verbose)
    if args.expression is not None:
        ok, out = repl.evaluate_line(args.expression)
        print(out)
        return 0 if ok else 1
    repl.repl_loop()
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
