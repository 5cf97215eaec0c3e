# tools/simulate_inputs.py

import argparse
import json
from pathlib import Path

from rich.console import Console

from config.config_loader import CONFIG_PATH, DEFAULT_CONFIG, load_config
from logger.logger import JSONLogger
from simulator.evaluator import evaluate_batch
from simulator.turing_machine import TuringMachine

console = Console()


# === Utility Loaders ===
def load_inputs(inputs_file):
    """One tape per line. Trailing newlines are dropped but an empty line is the empty tape."""
    with open(inputs_file, "r", encoding="utf-8") as f:
        return [line.rstrip("\r\n") for line in f]

def load_checkpoint(checkpoint_path):
    if checkpoint_path.exists():
        with open(checkpoint_path, "r", encoding="utf-8") as f:
            checkpoint = json.load(f)
        return checkpoint.get("completed", 0)
    return 0

def save_checkpoint(completed, checkpoint_path):
    with open(checkpoint_path, "w", encoding="utf-8") as f:
        json.dump({"completed": completed}, f, indent=4)


# === Main Simulation Runner ===
def simulate_inputs(program_file, alphabet, inputs_file, output_dir="results", batch_size=256,
                    max_steps=1_000_000, tape_size=1024, show_progress=True):
    """
    Run every input of `inputs_file` through the program, appending one JSON line
    per input to <output_dir>/<program>/results.jsonl. Inputs already recorded in
    the checkpoint are skipped, so an interrupted run can be resumed.
    """
    machine = TuringMachine.compile(Path(program_file).read_text(encoding="utf-8"), alphabet)

    results_folder = Path(output_dir) / Path(program_file).stem
    results_log = JSONLogger(str(results_folder), "results", dated=False)
    checkpoint_file = results_folder / "results_checkpoint.json"

    all_inputs = load_inputs(inputs_file)
    completed = load_checkpoint(checkpoint_file)
    console.print(f"Loaded {len(all_inputs):,} inputs. {max(len(all_inputs) - completed, 0):,} pending.")

    for batch_start in range(completed, len(all_inputs), batch_size):
        batch = all_inputs[batch_start:batch_start + batch_size]
        console.print(f"Processing batch {batch_start // batch_size + 1} with {len(batch):,} inputs...")

        entries = evaluate_batch(machine, batch, tape_size=tape_size, max_steps=max_steps,
                                 show_progress=show_progress)

        for entry in entries:
            if entry["error"] is not None:
                console.print(f"[WARNING] Input {entry['input']!r} failed: {entry['error']}",
                              style="yellow", markup=False)

        # Bulk write once per batch
        results_log.log_batch(entries)

        completed = batch_start + len(batch)
        save_checkpoint(completed, checkpoint_file)

    console.print("[green][SUCCESS] All inputs simulated. Results saved.[/green]")
    return Path(results_log.current_log)


# === CLI ===
def main(argv=None):
    parser = argparse.ArgumentParser(description="Run a Turing machine program over a file of inputs with checkpointing.")
    parser.add_argument("--program", required=True, help="Path to the program source")
    parser.add_argument("--alphabet", default="", help="Alphabet letters, e.g. ab")
    parser.add_argument("--inputs", required=True, help="Path to the inputs file (one tape per line)")
    parser.add_argument("--output", default="results", help="Output directory (default: results)")
    parser.add_argument("--config", default=CONFIG_PATH, help="Path to the runtime config")
    parser.add_argument("--batch_size", type=int, help="Inputs per save/checkpoint (default: from config)")
    parser.add_argument("--max_steps", type=int, help="Maximum steps before giving up on an input (default: from config)")
    parser.add_argument("--tape_size", type=int, help="Tape size in cells (default: from config)")
    parser.add_argument("--no_progress", action="store_true", help="Hide the progress bar")
    args = parser.parse_args(argv)

    if Path(args.config).exists():
        config = load_config(args.config)
    else:
        console.print(f"[yellow]No config at {args.config}, using defaults.[/yellow]")
        config = DEFAULT_CONFIG.copy()

    # Command-line values win over the config
    for key in ("batch_size", "max_steps", "tape_size"):
        if getattr(args, key) is None:
            setattr(args, key, config[key])

    return simulate_inputs(
        args.program,
        args.alphabet,
        args.inputs,
        args.output,
        batch_size=args.batch_size,
        max_steps=args.max_steps,
        tape_size=args.tape_size,
        show_progress=not args.no_progress
    )

if __name__ == "__main__":
    main()
