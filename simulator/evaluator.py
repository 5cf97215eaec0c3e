from rich.progress import Progress, SpinnerColumn, BarColumn, TextColumn, TimeElapsedColumn

from simulator.exceptions import TuringMachineError


def run_bounded(machine, execution_state, max_steps, trace=None):
    """
    Step `execution_state` at most `max_steps` times.
    Returns the Result if the machine halted, None if the budget ran out.
    """
    while execution_state.steps < max_steps:
        result = machine.step(execution_state, trace=trace)
        if result is not None:
            return result
    return None


def evaluate_input(machine, tape_contents, tape_size=1024, max_steps=1_000_000):
    """Run one input with a step budget and summarise it as a JSON-able dict."""
    entry = {
        "input": tape_contents,
        "halted": False,
        "accepted": None,
        "steps": 0,
        "tape": None,
        "head": None,
        "error": None,
    }

    execution_state = None
    try:
        execution_state = machine.begin(tape_size, tape_contents)
        result = run_bounded(machine, execution_state, max_steps)
    except TuringMachineError as e:
        entry["error"] = str(e)
        if execution_state is not None:
            entry["steps"] = execution_state.steps
        return entry

    if result is None:
        entry["steps"] = execution_state.steps
        entry["tape"] = execution_state.tape_contents()
        entry["head"] = execution_state.head
    else:
        entry.update(result.to_dict())
        entry["halted"] = True
    return entry


def evaluate_batch(machine, inputs, tape_size=1024, max_steps=1_000_000, show_progress=False):
    """Evaluate every input independently; one entry per input, in order."""
    inputs = list(inputs)
    if not show_progress:
        return [evaluate_input(machine, tape, tape_size, max_steps) for tape in inputs]

    entries = []
    with Progress(
            SpinnerColumn(),
            BarColumn(),
            "[progress.percentage]{task.percentage:>3.0f}%",
            TextColumn("{task.completed}/{task.total} Inputs"),
            TimeElapsedColumn()
    ) as progress:
        task = progress.add_task("[cyan]Simulating...", total=len(inputs))
        for tape in inputs:
            entries.append(evaluate_input(machine, tape, tape_size, max_steps))
            progress.update(task, advance=1)
    return entries
