# app.py

import argparse
import shlex
from pathlib import Path

from rich.console import Console
from rich.prompt import Prompt

from config.config_loader import CONFIG_PATH, DEFAULT_CONFIG, load_config
from logger.logger import JSONLogger
from simulator.exceptions import TuringMachineError
from simulator.turing_machine import TuringMachine

console = Console()


# === Session ===
class Session:
    """Everything the shell remembers between commands."""

    def __init__(self, config):
        self.config = config
        self.machine = None
        self.program = None
        self.last_result = None
        self.verbose = config["verbose"]
        self.running = True
        self.logger = None
        if config["log_results"]:
            self.logger = JSONLogger(config["output_directory"], config["log_file_prefix"])


class Command:
    """A shell command with an arity check and the action it runs."""

    def __init__(self, name, min_args, max_args, usage, description, action):
        self.name = name
        self.min_args = min_args
        self.max_args = max_args
        self.usage = usage
        self.description = description
        self.action = action

    def run(self, args):
        if len(args) < self.min_args or len(args) > self.max_args:
            console.print(f"Usage: {self.usage}", markup=False)
            return False
        self.action(args)
        return True


def parse_line(line):
    """Split a shell line into tokens, honouring double quotes."""
    return shlex.split(line)


def dispatch(line, commands):
    """Run the command named by the first token of `line`. Returns False if nothing ran."""
    try:
        tokens = parse_line(line)
    except ValueError as e:
        console.print(f"[red]Could not parse command: {e}[/red]")
        return False

    if not tokens:
        return False

    name, args = tokens[0], tokens[1:]
    found = next((c for c in commands if c.name == name), None)
    if found is None:
        console.print(f"Unknown command: {name}", markup=False)
        return False

    return found.run(args)


# === Utilities ===
def print_trace(execution_state, cell, transition):
    console.print(execution_state.tape_to_string(), markup=False, highlight=False)
    console.print(
        f"{transition.source_line}. {execution_state.state.name}, {cell} -> {transition}",
        markup=False, highlight=False
    )


def parse_int_argument(arg, arg_name):
    try:
        return int(arg)
    except ValueError:
        console.print(f"[red]Error in argument `{arg_name}` - Not an integer: {arg}[/red]")
        return None


# === Command handlers ===
def handle_load(session, args):
    path, alphabet = Path(args[0]), args[1]
    if not path.exists():
        console.print(f"[red]Error in argument `filename` - File not found: {path}[/red]")
        return

    source = path.read_text(encoding="utf-8")
    try:
        session.machine = TuringMachine.compile(source, alphabet)
    except TuringMachineError as e:
        console.print(f"Error instantiating Turing Machine: {e}", style="red", markup=False)
        return

    session.program = str(path)
    console.print(f"[green]Loaded {path} ({len(session.machine.states)} states).[/green]")


def handle_run(session, args):
    if session.machine is None:
        console.print("[red]No Turing machine loaded[/red]")
        return

    tape_contents = args[0] if args else ""
    tape_size = session.config["tape_size"]
    if len(args) > 1:
        tape_size = parse_int_argument(args[1], "memory size")
        if tape_size is None:
            return

    trace = print_trace if session.verbose else None
    try:
        result = session.machine.run(tape_contents, tape_size, trace=trace)
    except TuringMachineError as e:
        console.print(str(e), style="red", markup=False)
        return

    session.last_result = result
    console.print(result.describe(), markup=False, highlight=False)
    if session.logger is not None:
        session.logger.log_result(session.program, tape_contents, result)


def handle_debug(session, args):
    if args[0] == "on":
        session.verbose = True
    elif args[0] == "off":
        session.verbose = False
    else:
        console.print("Usage: debug <on|off>", markup=False)


def handle_dump(session, args):
    if session.machine is None:
        console.print("[red]No program to dump[/red]")
        return
    console.print(session.machine.dump(), markup=False, highlight=False, end="")


def handle_help(commands):
    for command in commands:
        console.print(f"{command.usage}\n  {command.description}", markup=False)


def handle_exit(session):
    console.print("[bold green]Goodbye![/bold green]")
    session.running = False


def build_commands(session):
    commands = [
        Command("load", 2, 2, "load <filename> <alphabet>", "Loads a program to later be run or debugged",
                lambda args: handle_load(session, args)),
        Command("run", 0, 2, "run [tape contents] [memory size]", "Runs the currently loaded program",
                lambda args: handle_run(session, args)),
        Command("debug", 1, 1, "debug <on|off>", "Toggles debug mode",
                lambda args: handle_debug(session, args)),
        Command("dump", 0, 0, "dump", "Outputs the current program to a string",
                lambda args: handle_dump(session, args)),
    ]
    commands.append(Command("help", 0, 0, "help", "Displays all the available commands",
                            lambda args: handle_help(commands)))
    commands.append(Command("exit", 0, 0, "exit", "Exits the REPL",
                            lambda args: handle_exit(session)))
    return commands


def load_runtime_config(path):
    if not Path(path).exists():
        console.print(f"[yellow]No config at {path}, using defaults.[/yellow]")
        return DEFAULT_CONFIG.copy()
    return load_config(path)


# === REPL ===
def interactive_main(session, commands):
    console.print("[bold cyan]Turing Machine VM[/bold cyan]")
    while session.running:
        try:
            line = Prompt.ask(">>>")
        except EOFError:
            break
        dispatch(line.strip(), commands)


# === Scripted mode for automation ===
def cli_main(session, commands, lines):
    console.print("[bold cyan]Turing Machine VM[/bold cyan]")
    for line in lines:
        console.print(f">>> {line}", markup=False)
        dispatch(line, commands)
        if not session.running:
            break


def main(argv=None):
    parser = argparse.ArgumentParser(description="Turing Machine VM")
    parser.add_argument("-c", "--command", action="append", default=[],
                        help="Command to run instead of starting the REPL (repeatable)")
    parser.add_argument("--config", default=CONFIG_PATH, help="Path to the runtime config")
    args = parser.parse_args(argv)

    session = Session(load_runtime_config(args.config))
    commands = build_commands(session)

    if args.command:
        cli_main(session, commands, args.command)
    else:
        interactive_main(session, commands)

if __name__ == "__main__":
    main()
