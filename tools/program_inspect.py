import argparse
from pathlib import Path

from rich.console import Console
from rich.table import Table

from simulator.transition import WILDCARD
from simulator.turing_machine import TuringMachine

console = Console()


def transition_rows(machine):
    """One row per reachable state: state name, then the action for each symbol column."""
    symbols = list(machine.alphabet) + [WILDCARD]
    rows = []
    for state in machine.reachable_states():
        row = [state.name]
        for symbol in symbols:
            transition = state.transitions.get(symbol)
            if transition is None:
                row.append("-")
            else:
                row.append(f"{transition.write}{transition.move.token.upper()}{transition.next_state}")
        rows.append(row)
    return symbols, rows


def latex_table(symbols, rows):
    lines = [r"\begin{array}{c|" + "c" * len(symbols) + "}"]
    lines.append("State/Symbol & " + " & ".join(f"\\text{{{s}}}" for s in symbols) + r" \\ \hline")
    for row in rows:
        lines.append(" & ".join(f"\\text{{{cell}}}" for cell in row) + r" \\")
    lines.append(r"\end{array}")
    return "\n".join(lines)


def pretty_print_program(machine, latex=False):
    """Print the program as a state x symbol table with compact <write><move><next> actions."""
    symbols, rows = transition_rows(machine)

    table = Table(title="Transition Table", show_header=True, header_style="bold magenta")
    table.add_column("State", justify="center")
    for symbol in symbols:
        table.add_column(symbol, justify="center")
    for row in rows:
        table.add_row(*row)
    console.print(table)

    if latex:
        console.print("\n=== LaTeX Table ===")
        console.print(latex_table(symbols, rows), markup=False, highlight=False)


def main():
    parser = argparse.ArgumentParser(description="Turing Machine Program Inspector")
    parser.add_argument("program", help="Path to the program source")
    parser.add_argument("--alphabet", default="", help="Alphabet letters, e.g. ab")
    parser.add_argument("--latex", action="store_true", help="Also print a LaTeX array")
    args = parser.parse_args()

    source = Path(args.program).read_text(encoding="utf-8")
    machine = TuringMachine.compile(source, args.alphabet)
    console.print(f"[INFO] Program {args.program}", markup=False)
    console.print(f"  States: {len(machine.states)}")
    console.print(f"  Alphabet: {' '.join(machine.alphabet)}", markup=False)
    pretty_print_program(machine, latex=args.latex)

if __name__ == "__main__":
    main()
